import json

import httpx
import pytest

from notary.app.services.digest_client import (
    DigestServiceBadStatus,
    DigestServiceDecodeError,
    DigestServiceError,
    DigestServiceUnreachable,
    HasherDigestClient,
)
from notary.tests.fakes import HELLO_DIGEST

HASH_URL = "http://hasher.test/hash"


def make_client(handler) -> HasherDigestClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return HasherDigestClient(http_client=http_client, url=HASH_URL)


def test_successful_digest_round_trip():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["correlation_id"] = request.headers.get("X-Correlation-ID")
        return httpx.Response(200, json={"digest": HELLO_DIGEST})

    client = make_client(handler)

    assert client.compute_digest("hello") == HELLO_DIGEST
    assert seen["url"] == HASH_URL
    assert seen["body"] == {"text": "hello"}
    assert seen["correlation_id"].startswith("notary-")


def test_client_is_callable_as_digest_function():
    client = make_client(lambda request: httpx.Response(200, json={"digest": "abc"}))

    assert client("anything") == "abc"


def test_transport_failure_is_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DigestServiceUnreachable) as excinfo:
        make_client(handler).compute_digest("hello")

    assert "unreachable" in str(excinfo.value)
    assert excinfo.value.correlation_id.startswith("notary-")
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_timeout_is_unreachable():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DigestServiceUnreachable):
        make_client(handler).compute_digest("hello")


@pytest.mark.parametrize("status_code", [400, 404, 500, 503])
def test_non_success_status_is_bad_status(status_code):
    client = make_client(
        lambda request: httpx.Response(status_code, json={"error": "nope"})
    )

    with pytest.raises(DigestServiceBadStatus) as excinfo:
        client.compute_digest("hello")

    assert excinfo.value.status_code == status_code
    assert str(status_code) in str(excinfo.value)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"hash": HELLO_DIGEST}),
        httpx.Response(200, json={"digest": 42}),
        httpx.Response(200, json={"digest": ""}),
    ],
)
def test_undecodable_body_is_decode_error(response):
    client = make_client(lambda request: response)

    with pytest.raises(DigestServiceDecodeError):
        client.compute_digest("hello")


def test_all_failures_share_a_base_class():
    for cls in (
        DigestServiceUnreachable,
        DigestServiceBadStatus,
        DigestServiceDecodeError,
    ):
        assert issubclass(cls, DigestServiceError)
