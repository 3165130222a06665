"""
Errors raised by the influencer maintenance procedures.

Record-level errors (validation, storage) are caught per record and counted;
FatalStartupError aborts a run before any record is touched.
"""


class InfluencerError(Exception):
    """Base class for influencer maintenance errors."""


class RecordValidationError(InfluencerError):
    """A source record is missing required data or carries unusable values."""


class StorageError(InfluencerError):
    """The storage layer failed to read, create or delete a record."""


class FatalStartupError(InfluencerError):
    """The run cannot start: bad input file or missing primary locale."""
