"""
Configuration constants for the chrono manifest.
"""

# --- Metadata Parsing ---
# exifread tag names ("<IFD> <Tag>")
CAPTURE_DATE_TAG = 'EXIF DateTimeOriginal'
CAPTURE_OFFSET_TAG = 'EXIF OffsetTimeOriginal'

# EXIF writes dates as "YYYY:MM:DD HH:MM:SS"
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# --- Manifest Output ---
MANIFEST_HEADERS = ["File name", "File size", "Timestamp"]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CSV_LINE_TERMINATOR = "\n"

# --- Overwrite Confirmation ---
# Only this answer (case-insensitive) truncates an existing destination
CONFIRM_ANSWER = "y"
