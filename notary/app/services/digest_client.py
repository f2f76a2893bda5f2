"""
Synchronous client for the external Digest Service (hasher).

Contract:
- request:  POST {"text": str}
- response: 2xx {"digest": str}

Failures surface immediately as DigestServiceError subclasses. There is
no retry loop here; the caller decides what a failure means. Each call
is bounded by the timeout configured on the shared ``httpx.Client``.

Services never depend on this class directly. They receive a
``DigestFunction``, so tests can pass a plain callable instead of
standing up network I/O.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

import httpx

logger = logging.getLogger("notary.digest_client")

DigestFunction = Callable[[str], str]


class DigestServiceError(RuntimeError):
    """Base class for Digest Service failures."""

    def __init__(self, message: str, *, correlation_id: str) -> None:
        super().__init__(message)
        self.correlation_id = correlation_id


class DigestServiceUnreachable(DigestServiceError):
    """The transport could not complete the request."""


class DigestServiceBadStatus(DigestServiceError):
    """The Digest Service answered with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        correlation_id: str,
        status_code: int,
    ) -> None:
        super().__init__(message, correlation_id=correlation_id)
        self.status_code = status_code


class DigestServiceDecodeError(DigestServiceError):
    """The response body could not be parsed into a digest string."""


class HasherDigestClient:
    """
    Bridge from the notary to the hasher's ``/hash`` endpoint.

    The ``httpx.Client`` is owned by the application lifespan and shared
    across request threads; ``httpx.Client`` is safe for concurrent use.
    """

    def __init__(self, *, http_client: httpx.Client, url: str) -> None:
        self.client = http_client
        self.url = url

    def compute_digest(self, text: str) -> str:
        correlation_id = f"notary-{uuid.uuid4()}"

        try:
            response = self.client.post(
                self.url,
                json={"text": text},
                headers={"X-Correlation-ID": correlation_id},
            )
        except httpx.TransportError as exc:
            logger.warning(
                "digest_service_unreachable",
                extra={
                    "trace_id": correlation_id,
                    "error_type": type(exc).__name__,
                },
            )
            raise DigestServiceUnreachable(
                f"hasher service unreachable "
                f"(correlation_id={correlation_id}): {exc}",
                correlation_id=correlation_id,
            ) from exc

        if not response.is_success:
            logger.warning(
                "digest_service_bad_status",
                extra={
                    "trace_id": correlation_id,
                    "status_code": response.status_code,
                },
            )
            raise DigestServiceBadStatus(
                f"hasher service returned status: {response.status_code} "
                f"(correlation_id={correlation_id})",
                correlation_id=correlation_id,
                status_code=response.status_code,
            )

        return _decode_digest(response, correlation_id)

    __call__ = compute_digest


def _decode_digest(response: httpx.Response, correlation_id: str) -> str:
    try:
        body = response.json()
    except ValueError as exc:
        raise DigestServiceDecodeError(
            f"failed to decode hash response "
            f"(correlation_id={correlation_id}): {exc}",
            correlation_id=correlation_id,
        ) from exc

    digest = body.get("digest") if isinstance(body, dict) else None

    if not isinstance(digest, str) or not digest:
        raise DigestServiceDecodeError(
            "failed to decode hash response "
            f"(correlation_id={correlation_id}): "
            "missing or empty 'digest' member",
            correlation_id=correlation_id,
        )

    return digest
