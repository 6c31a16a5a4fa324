"""errors.py — Exception hierarchy surfaced to API and UI callers."""
from typing import Optional


class ForgeGuardError(Exception):
    """Base class; ``status_code`` is the HTTP status a route answers with."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ForgeGuardError):
    status_code = 400


class MetadataParseError(ValidationError):
    pass


class MetadataFetchError(ForgeGuardError):
    """Upstream metadata API unreachable, unauthorized or malformed. Retryable."""
    status_code = 502

    def __init__(self, message: str, upstream_status: Optional[int] = None,
                 details: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.details = details


class ReportNotFoundError(ForgeGuardError):
    status_code = 404
