"""
Feed API Client

Ships record batches to the product-recommendation service.
Handles authentication, rate limiting, and retries.
"""

import logging
import time
from typing import Dict, List

import requests

logger = logging.getLogger(__name__)


class FeedAPIClient:
    """
    Client for the recommendation service's product feed endpoint.

    Handles:
    - Authentication (API key header)
    - Rate limiting (2 requests/second)
    - Retries on 429 and gateway errors

    Usage:
        with FeedAPIClient(endpoint_url, api_key="...") as client:
            for batch in exporter.run(config):
                client.post_batch(batch)
    """

    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}

    def __init__(self, endpoint_url: str, api_key: str, timeout: int = 30):
        """
        Initialize the API client.

        Args:
            endpoint_url: Full URL of the product feed endpoint
            api_key: Feed API key
            timeout: Request timeout in seconds
        """
        self.endpoint_url = endpoint_url
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = 0.5  # 2 req/sec

        self.batches_sent = 0
        self.records_sent = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Implement rate limiting (2 requests/second max)."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()
        self.requests_made += 1

    @staticmethod
    def _retry_after(response, attempt: int) -> int:
        """Seconds to wait before the next attempt (Retry-After in seconds, else backoff)."""
        try:
            return int(response.headers["Retry-After"])
        except (KeyError, ValueError):
            return 2 ** attempt

    def post_batch(self, records: List[Dict]) -> bool:
        """
        Send one batch of product records.

        Empty batches are not sent.

        Args:
            records: Records of one batch, in order

        Returns:
            True if the service accepted the batch
        """
        if not records:
            return True

        payload = {"products": records}

        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            try:
                response = self.session.post(self.endpoint_url, json=payload, timeout=self.timeout)

                # Retry on rate limiting or server errors
                if response.status_code in self.RETRYABLE_STATUS_CODES:
                    retry_after = self._retry_after(response, attempt)
                    logger.warning("HTTP %d posting batch, retry %d/%d in %ds...",
                                   response.status_code, attempt + 1,
                                   self.MAX_RETRIES, retry_after)
                    time.sleep(retry_after)
                    continue

                if response.status_code >= 400:
                    logger.error("API Error %d: %s", response.status_code, response.text[:200])
                    return False

                self.batches_sent += 1
                self.records_sent += len(records)
                logger.debug("Batch accepted (%d records)", len(records))
                return True

            except requests.exceptions.Timeout:
                logger.error("Request timeout posting batch of %d records", len(records))
                return False
            except requests.exceptions.RequestException as e:
                logger.error("Request failed: %s", e)
                return False

        logger.error("Max retries (%d) exceeded posting batch", self.MAX_RETRIES)
        return False

    def get_stats(self) -> Dict[str, int]:
        return {
            'batches_sent': self.batches_sent,
            'records_sent': self.records_sent,
            'requests_made': self.requests_made,
        }
