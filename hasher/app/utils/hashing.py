"""
Digest primitive for the hasher service.

Current scope:
- SHA-256 of the UTF-8 encoding of a text, as lowercase hex

Explicit non-scope:
- Unicode normalization, whitespace trimming, or any other rewriting of
  the input. Two texts that differ by a single code point produce
  different digests, which is what verification relies on.
"""

import hashlib


def compute_text_digest(text: str) -> str:
    """
    Compute the content digest of ``text``.

    Returns:
        64 lowercase hex characters, no algorithm prefix.
        Example: ``"hello"`` -> ``2cf24dba5fb0a30e...``
    """
    if not isinstance(text, str):
        raise TypeError(
            "compute_text_digest expects str, "
            f"got {type(text).__name__}"
        )

    return hashlib.sha256(text.encode("utf-8")).hexdigest()
