import csv
import io
from datetime import datetime, timedelta, timezone

import pytest

from chrono_manifest.models import FileRecord
from chrono_manifest.reporting import ManifestWriter


def test_writes_header_and_rows():
    records = [
        FileRecord("b.jpg", 200, datetime(2022, 1, 1, 9, 0, 0, tzinfo=timezone.utc)),
        FileRecord("a.jpg", 100, datetime(2022, 1, 1, 10, 0, 0, 500000, tzinfo=timezone.utc)),
    ]
    out = io.StringIO()
    ManifestWriter().write(records, out)

    assert out.getvalue() == (
        "File name,File size,Timestamp\n"
        "b.jpg,200,2022-01-01 09:00:00\n"
        "a.jpg,100,2022-01-01 10:00:00\n"
    )


def test_timestamp_is_formatted_in_its_own_offset():
    tz = timezone(timedelta(hours=-5))
    records = [FileRecord("a.jpg", 1, datetime(2022, 6, 1, 23, 30, 0, tzinfo=tz))]
    out = io.StringIO()
    ManifestWriter().write(records, out)

    assert out.getvalue().splitlines()[1] == "a.jpg,1,2022-06-01 23:30:00"


def test_names_with_delimiters_are_quoted():
    records = [FileRecord('holiday, "best".jpg', 5, datetime(2022, 1, 1, tzinfo=timezone.utc))]
    out = io.StringIO()
    ManifestWriter().write(records, out)

    rows = list(csv.reader(io.StringIO(out.getvalue())))
    assert rows[1] == ['holiday, "best".jpg', "5", "2022-01-01 00:00:00"]


def test_empty_manifest_has_header_only():
    out = io.StringIO()
    ManifestWriter().write([], out)
    assert out.getvalue() == "File name,File size,Timestamp\n"


def test_stream_is_flushed():
    class TrackingStream(io.StringIO):
        flushed = False

        def flush(self):
            self.flushed = True
            super().flush()

    out = TrackingStream()
    ManifestWriter().write([], out)
    assert out.flushed


def test_write_errors_propagate():
    class FullDisk(io.StringIO):
        def write(self, s):
            raise OSError(28, "No space left on device")

    with pytest.raises(OSError, match="No space left"):
        ManifestWriter().write([], FullDisk())
