"""
Batch File Writer

Writes record batches to a JSON lines file (one record per line).
"""

import json
import logging
import os
from typing import Dict, List

logger = logging.getLogger(__name__)


class BatchFileWriter:
    """
    Writes batches to a JSON lines file.

    Usage:
        with BatchFileWriter("output/products.jsonl") as writer:
            for batch in exporter.run(config):
                writer.write_batch(batch)
    """

    def __init__(self, output_path: str, append: bool = False):
        """
        Initialize the writer.

        Args:
            output_path: Output file path (directories are created)
            append: Append to an existing file instead of truncating it
        """
        self.output_path = output_path
        os.makedirs(os.path.dirname(output_path) or '.', exist_ok=True)
        self._file = open(output_path, 'a' if append else 'w', encoding='utf-8')
        self.batches_written = 0
        self.records_written = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if not self._file.closed:
            self._file.close()
            logger.info("Wrote %d records in %d batches to %s",
                        self.records_written, self.batches_written, self.output_path)

    def write_batch(self, records: List[Dict]) -> int:
        """
        Append one batch and flush it to disk.

        Returns:
            Number of records written
        """
        for record in records:
            self._file.write(json.dumps(record, ensure_ascii=False))
            self._file.write('\n')
        self._file.flush()

        self.batches_written += 1
        self.records_written += len(records)
        return len(records)
