"""Exception hierarchy for package-auditor."""

from typing import Optional


class AuditError(Exception):
    """Base class for every fatal error raised by an audit run."""


class TransportError(AuditError):
    """Network failure or unexpected HTTP status from Bitbucket."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(TransportError):
    """The token was rejected (401) or lacks permission (403)."""


class NotFoundError(TransportError):
    """The project, repository or file does not exist (404)."""


class OutputError(AuditError):
    """The rendered report could not be written."""
