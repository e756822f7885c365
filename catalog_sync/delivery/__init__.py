"""
Batch delivery modules.

Modules:
    feed_client - HTTP client for the recommendation service feed endpoint
    file_writer - JSON lines file output
"""

from .feed_client import FeedAPIClient
from .file_writer import BatchFileWriter

__all__ = [
    'FeedAPIClient',
    'BatchFileWriter',
]
