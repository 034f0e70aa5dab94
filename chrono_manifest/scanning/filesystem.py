import os
import logging
from datetime import datetime
from functools import cmp_to_key
from pathlib import Path
from typing import Iterable, List, Optional

from tqdm import tqdm

from ..models import FileRecord, compare_records
from ..metadata.extract import TimestampResolver


def is_regular_file(entry) -> bool:
    """True for regular files only. Symlinks are not followed."""
    return entry.is_file(follow_symlinks=False)


def build_record(entry, stat_result: os.stat_result, timestamp: datetime, source: str) -> FileRecord:
    return FileRecord(
        name=entry.name,
        size=stat_result.st_size,
        timestamp=timestamp,
        timestamp_source=source,
    )


class DirectoryHarvester:
    def __init__(self, resolver: Optional[TimestampResolver] = None, show_progress: bool = False):
        self.resolver = resolver or TimestampResolver()
        self.show_progress = show_progress

    def scan(self, directory: Path) -> List[FileRecord]:
        """Lists a single directory (no recursion) and harvests it."""
        logging.info(f"Scanning {directory}...")
        with os.scandir(directory) as it:
            records = self.harvest(it)

        fallback_count = sum(1 for r in records if r.timestamp_source == "mtime")
        logging.info(f"Scan complete. {len(records)} files, {fallback_count} without capture date.")
        return records

    def harvest(self, entries: Iterable) -> List[FileRecord]:
        """
        Builds a record for every regular file and returns them sorted by
        timestamp, then name.

        Fails closed: an error reading any entry aborts the whole harvest.
        Only the embedded-metadata lookup is allowed to fail quietly.
        """
        records: List[FileRecord] = []

        for entry in tqdm(entries, desc="Harvesting", unit="entry", disable=not self.show_progress):
            if not is_regular_file(entry):
                logging.debug(f"Skipping non-file entry: {entry.name!r}")
                continue

            stat_result = entry.stat(follow_symlinks=False)
            timestamp, source = self.resolver.resolve(entry, stat_result)

            record = build_record(entry, stat_result, timestamp, source)
            logging.debug(f"{record.display_name}: {record.timestamp.isoformat()} ({source})")
            records.append(record)

        records.sort(key=cmp_to_key(compare_records))
        return records
