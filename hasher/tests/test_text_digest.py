import pytest

from hasher.app.utils.hashing import compute_text_digest

HELLO_DIGEST = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


def test_known_digest():
    assert compute_text_digest("hello") == HELLO_DIGEST


def test_digest_depends_on_every_character():
    assert compute_text_digest("hello ") != HELLO_DIGEST
    assert compute_text_digest("Hello") != HELLO_DIGEST


def test_digest_is_lowercase_hex():
    digest = compute_text_digest("any text at all")

    assert len(digest) == 64
    assert digest == digest.lower()
    int(digest, 16)


def test_rejects_bytes():
    with pytest.raises(TypeError):
        compute_text_digest(b"hello")
