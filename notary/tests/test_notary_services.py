from concurrent.futures import ThreadPoolExecutor

import pytest

from notary.app.errors import DigestUnavailable, InputValidationError
from notary.app.services.digest_client import (
    DigestServiceBadStatus,
    DigestServiceDecodeError,
)
from notary.app.services.listing import ListingService
from notary.app.services.sealing import SealingService
from notary.app.services.verification import ResolutionService, VerificationService
from notary.app.store.record_store import RecordStore, format_identifier
from notary.tests.fakes import HELLO_DIGEST, FakeDigest, unreachable


@pytest.fixture
def sealing(store, fake_digest) -> SealingService:
    return SealingService(store=store, compute_digest=fake_digest)


@pytest.fixture
def verification(store, fake_digest) -> VerificationService:
    return VerificationService(store=store, compute_digest=fake_digest)


# ----------------------------------------------------------------------
# Sealing
# ----------------------------------------------------------------------


def test_seal_hello_produces_first_identifier(sealing):
    record = sealing.seal("hello")

    assert record.identifier == "SEAL-000001"
    assert record.digest == HELLO_DIGEST
    assert record.payload == "hello"
    assert record.created_at.tzinfo is not None


def test_seal_empty_text_rejected_before_digest(sealing, fake_digest, store):
    with pytest.raises(InputValidationError):
        sealing.seal("")

    assert fake_digest.calls == []
    assert len(store) == 0


def test_reseal_overwrites_and_advances_identifier(sealing, store):
    first = sealing.seal("same text")
    second = sealing.seal("same text")

    assert first.digest == second.digest
    assert first.identifier == "SEAL-000001"
    assert second.identifier == "SEAL-000002"
    assert store.get(first.digest) == second


@pytest.mark.parametrize(
    "failure",
    [
        unreachable(),
        DigestServiceBadStatus(
            "hasher service returned status: 500",
            correlation_id="test",
            status_code=500,
        ),
        DigestServiceDecodeError("failed to decode hash response", correlation_id="test"),
    ],
)
def test_digest_failure_never_reaches_store(store, failure):
    service = SealingService(store=store, compute_digest=FakeDigest(failure=failure))

    with pytest.raises(DigestUnavailable) as excinfo:
        service.seal("hello")

    assert excinfo.value.__cause__ is failure
    assert excinfo.value.status_code == 503
    assert len(store) == 0
    # counter untouched: next successful seal still gets the first identifier
    assert SealingService(store=store, compute_digest=FakeDigest()).seal(
        "hello"
    ).identifier == "SEAL-000001"


def test_concurrent_seals_are_gap_free(sealing, store):
    texts = [f"document {n}" for n in range(100)]

    with ThreadPoolExecutor(max_workers=12) as pool:
        records = list(pool.map(sealing.seal, texts))

    identifiers = sorted(r.identifier for r in records)
    assert identifiers == [format_identifier(n) for n in range(1, 101)]
    assert len(store) == 100


# ----------------------------------------------------------------------
# Verification
# ----------------------------------------------------------------------


def test_seal_then_verify_matches(sealing, verification):
    sealed = sealing.seal("contract v1")

    result = verification.verify("contract v1")

    assert result.matched is True
    assert result.record.digest == sealed.digest
    assert result.record.identifier == sealed.identifier


def test_verify_modified_text_does_not_match(sealing, verification):
    sealing.seal("contract v1")

    result = verification.verify("contract v2")

    assert result.matched is False
    assert result.record is None


def test_verify_empty_text_rejected_before_digest(verification, fake_digest):
    with pytest.raises(InputValidationError):
        verification.verify("")

    assert fake_digest.calls == []


def test_verify_does_not_mutate_store(verification, store):
    verification.verify("never sealed")

    assert len(store) == 0
    assert store.allocate_identifier() == "SEAL-000001"


def test_verify_digest_failure_maps_to_unavailable(store):
    service = VerificationService(
        store=store, compute_digest=FakeDigest(failure=unreachable())
    )

    with pytest.raises(DigestUnavailable, match="unreachable"):
        service.verify("hello")


# ----------------------------------------------------------------------
# Resolution
# ----------------------------------------------------------------------


def test_resolve_after_seal(sealing, store, fake_digest):
    sealed = sealing.seal("hello")
    calls_after_seal = len(fake_digest.calls)

    result = ResolutionService(store=store).resolve(sealed.digest)

    assert result.found is True
    assert result.record.identifier == sealed.identifier
    assert result.record.created_at == sealed.created_at
    assert len(fake_digest.calls) == calls_after_seal


def test_resolve_unknown_digest(store):
    result = ResolutionService(store=store).resolve("not-a-real-digest")

    assert result.found is False
    assert result.record is None


def test_resolve_empty_digest_rejected(store):
    with pytest.raises(InputValidationError, match="Digest field is required"):
        ResolutionService(store=store).resolve("")


# ----------------------------------------------------------------------
# Listing
# ----------------------------------------------------------------------


def test_listing_strips_payload(sealing, store):
    sealing.seal("private one")
    sealing.seal("private two")

    records = ListingService(store=store).list()

    assert len(records) == 2
    assert all(r.payload is None for r in records)
    assert {r.identifier for r in records} == {"SEAL-000001", "SEAL-000002"}


def test_listing_empty_store():
    assert ListingService(store=RecordStore()).list() == []
