"""
Error taxonomy for the Notary service.

Every failure that can terminate a request is a NotaryError carrying the
HTTP status it maps to. Handlers registered in ``notary.app.main`` render
them as ``{"error": message}``. None of these errors are retried, and
none of them leave partial state in the record store.
"""

from __future__ import annotations


class NotaryError(Exception):
    """Base class for request-terminal notary failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(NotaryError):
    """A required request field is empty or missing."""

    status_code = 400


class MalformedRequest(NotaryError):
    """The request body could not be parsed into the expected shape."""

    status_code = 400


class DigestUnavailable(NotaryError):
    """
    The Digest Service could not produce a digest.

    Always chained (``raise ... from exc``) to the underlying
    DigestServiceError so the transport / status / decode cause survives.
    """

    status_code = 503


class MethodNotAllowed(NotaryError):
    status_code = 405
