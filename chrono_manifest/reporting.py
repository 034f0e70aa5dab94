import csv
import logging
from typing import Iterable, TextIO

from .models import FileRecord
from . import config

class ManifestWriter:
    def write(self, records: Iterable[FileRecord], stream: TextIO):
        """
        Writes the manifest CSV (header + one row per record) and flushes
        the stream. Write and flush errors propagate untouched.
        """
        writer = csv.writer(stream, lineterminator=config.CSV_LINE_TERMINATOR)
        writer.writerow(config.MANIFEST_HEADERS)

        row_count = 0
        for record in records:
            writer.writerow(self._format_row(record))
            row_count += 1

        # Buffered rows must reach the destination before we report success
        stream.flush()
        logging.info(f"Manifest written. {row_count} rows.")

    def _format_row(self, record: FileRecord) -> list:
        return [
            record.display_name,
            str(record.size),
            record.timestamp.strftime(config.TIMESTAMP_FORMAT),
        ]
