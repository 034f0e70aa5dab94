import os
from datetime import datetime

import pytest
from PIL import Image

from chrono_manifest import config
from chrono_manifest.metadata.extract import MetadataExtractor

EXIF_IFD_POINTER = 0x8769
DATE_TIME_ORIGINAL = 0x9003


def set_mtime(path, dt: datetime):
    """Sets atime/mtime from a naive local datetime."""
    ts = dt.timestamp()
    os.utime(path, (ts, ts))


def write_exif_jpeg(path, capture: str):
    """Writes a small JPEG whose EXIF block carries DateTimeOriginal."""
    with Image.new("RGB", (8, 8), color="red") as im:
        exif = Image.Exif()
        exif[EXIF_IFD_POINTER] = {DATE_TIME_ORIGINAL: capture}
        im.save(path, exif=exif)


@pytest.fixture
def fake_capture_dates(monkeypatch):
    """
    Patches the decoder so files named in the returned dict report that
    capture date. Everything else decodes to no tags.
    """
    dates = {}

    def fake_decode(self, stream):
        name = os.path.basename(stream.name)
        if name in dates:
            return {config.CAPTURE_DATE_TAG: dates[name]}
        return {}

    monkeypatch.setattr(MetadataExtractor, "decode", fake_decode)
    return dates
