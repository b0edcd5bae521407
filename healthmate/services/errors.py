"""Errors raised by the report analysis pipeline. Routes map them to HTTP responses."""


class AnalysisError(Exception):
    """Base class for failures that abort an analysis run."""


class NotFoundError(AnalysisError):
    pass


class FetchError(AnalysisError):
    """The document could not be downloaded (signed URL and raw URL both failed)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(AnalysisError):
    """The downloaded bytes are not a readable PDF."""


class PersistenceError(AnalysisError):
    pass
