"""
Custom exception hierarchy for the chrono manifest.

Filesystem and output failures are plain OSErrors and propagate as such;
these types cover the cases the application needs to tell apart.
"""


class ChronoManifestError(Exception):
    """Base exception for all chrono manifest errors."""
    pass


class MetadataExtractionError(ChronoManifestError):
    """Raised when embedded metadata cannot be decoded from a file."""
    pass


class DestinationExistsError(ChronoManifestError, FileExistsError):
    """Raised when the output file exists and the user declined to overwrite it."""
    pass
