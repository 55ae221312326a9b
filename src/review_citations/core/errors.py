"""Fatal errors that abort a run."""


class ReviewCitationsError(Exception):
    """Base class for unrecoverable infrastructure failures."""


class ReviewSourceError(ReviewCitationsError):
    """Review documents could not be read."""


class CacheError(ReviewCitationsError):
    """Citation cache file could not be read or written."""


class ReportWriteError(ReviewCitationsError):
    """Aggregate report could not be written."""
