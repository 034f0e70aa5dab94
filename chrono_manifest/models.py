import os
from dataclasses import dataclass
from datetime import datetime

@dataclass(frozen=True)
class FileRecord:
    """
    Represents one regular file in the manifest.
    """
    name: str               # raw platform name, may carry surrogate escapes
    size: int
    timestamp: datetime     # always timezone-aware
    timestamp_source: str = "mtime"  # exif/mtime

    @property
    def display_name(self) -> str:
        """Lossy text form of the name; undecodable bytes become U+FFFD."""
        return os.fsencode(self.name).decode("utf-8", errors="replace")


def compare_records(a: FileRecord, b: FileRecord) -> int:
    """
    Three-way comparison defining the manifest order.

    Timestamp first (compared as instants), then the name in the byte order
    of its filesystem encoding.
    """
    if a.timestamp < b.timestamp:
        return -1
    if a.timestamp > b.timestamp:
        return 1

    a_name = os.fsencode(a.name)
    b_name = os.fsencode(b.name)
    if a_name < b_name:
        return -1
    if a_name > b_name:
        return 1
    return 0
