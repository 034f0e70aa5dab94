import os
import logging
from datetime import datetime
from typing import BinaryIO, Mapping, Optional, Tuple, Any

import exifread

from .. import config
from ..exceptions import MetadataExtractionError


class MetadataExtractor:
    """
    Decoder for metadata embedded in file content.

    Backed by 'exifread' (fast, Python-native). Knows nothing about
    timestamps; it only turns bytes into a tag mapping or fails.
    """

    def decode(self, stream: BinaryIO) -> Mapping[str, Any]:
        """
        Returns the tags found in the stream, keyed "<IFD> <Tag>".
        An empty mapping means the content carries no EXIF block.
        """
        try:
            # details=False skips MakerNotes and thumbnails
            return exifread.process_file(stream, details=False)
        except Exception as e:
            # exifread raises a wide range of errors on truncated/corrupt data
            raise MetadataExtractionError(f"Cannot decode metadata: {e}") from e


class TimestampResolver:
    """
    Finds the moment a file's content was created.

    Strategy (first hit wins):
      1. Embedded capture time (EXIF DateTimeOriginal).
      2. Filesystem modification time.

    Every failure of step 1 only means "no embedded timestamp"; step 2 is
    the one place where an OSError is allowed to escape.
    """

    def __init__(self, extractor: Optional[MetadataExtractor] = None):
        self.extractor = extractor or MetadataExtractor()

    def resolve(self, entry, stat_result: Optional[os.stat_result] = None) -> Tuple[datetime, str]:
        """
        stat_result, when the caller already has one, saves a second stat
        on fallback.

        Returns:
            (timestamp, source) where source is 'exif' or 'mtime'
        """
        dt = self.capture_time(entry.path)
        if dt is not None:
            return dt, "exif"
        return self.modified_time(entry, stat_result), "mtime"

    def capture_time(self, path) -> Optional[datetime]:
        tags = self.read_tags(path)
        if tags is None:
            return None

        value = self.lookup_capture_tag(tags)
        if value is None:
            logging.debug(f"No capture date tag in {path}")
            return None

        dt = self.parse_capture_value(value, tags)
        if dt is None:
            logging.debug(f"Unparseable capture date {value!r} in {path}")
        return dt

    def modified_time(self, entry, stat_result: Optional[os.stat_result] = None) -> datetime:
        """Filesystem mtime as an aware datetime in the local offset."""
        st = stat_result if stat_result is not None else entry.stat(follow_symlinks=False)
        return datetime.fromtimestamp(st.st_mtime).astimezone()

    # --- Attempt Steps ---

    def read_tags(self, path) -> Optional[Mapping[str, Any]]:
        """Opens and decodes the file. None when nothing usable came out."""
        try:
            with open(path, 'rb') as f:
                tags = self.extractor.decode(f)
        except OSError as e:
            logging.debug(f"Cannot open {path} for metadata: {e}")
            return None
        except MetadataExtractionError as e:
            logging.debug(f"{path}: {e}")
            return None

        if not tags:
            logging.debug(f"No embedded metadata in {path}")
            return None
        return tags

    def lookup_capture_tag(self, tags: Mapping[str, Any]) -> Optional[str]:
        if config.CAPTURE_DATE_TAG not in tags:
            return None
        value = str(tags[config.CAPTURE_DATE_TAG]).strip("\x00 ")
        return value or None

    def parse_capture_value(self, value: str, tags: Mapping[str, Any]) -> Optional[datetime]:
        """
        Interprets "YYYY:MM:DD HH:MM:SS". The offset comes from
        OffsetTimeOriginal when present, otherwise the value is local time.
        """
        # Some cameras append sub-seconds which strptime rejects
        value = value.split(".")[0]
        try:
            naive = datetime.strptime(value, config.EXIF_DATE_FORMAT)
        except ValueError:
            return None

        tz = self._parse_offset(tags)
        if tz is not None:
            return naive.replace(tzinfo=tz)

        try:
            return naive.astimezone()
        except (OverflowError, OSError, ValueError):
            # Dates outside the platform's mktime range
            return None

    def _parse_offset(self, tags: Mapping[str, Any]):
        if config.CAPTURE_OFFSET_TAG not in tags:
            return None
        raw = str(tags[config.CAPTURE_OFFSET_TAG]).strip("\x00 ")
        try:
            return datetime.strptime(raw, "%z").tzinfo
        except ValueError:
            return None
