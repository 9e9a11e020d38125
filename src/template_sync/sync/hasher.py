"""Normalised content fingerprints.

Fingerprints must be stable across platforms and editors, so content is
normalised before hashing:

1. Strip a leading BOM (``\\ufeff``).
2. Replace ``\\r\\n`` with ``\\n``.
3. Right-strip each line.

Trailing blank lines are kept; they are content.  Bytes that are not valid
UTF-8 survive normalisation as surrogate escapes, so two files that differ
only in such bytes still get different fingerprints.  The digest is SHA-256
of the re-encoded normalised text, tagged as ``sha256:<hex>``.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from template_sync.sync.errors import HashingIOError

FINGERPRINT_PREFIX = "sha256:"


def normalize_content(content: bytes | str) -> str:
    """Return *content* as text with BOM, CRLF and trailing whitespace removed.

    Bytes are decoded as UTF-8 with ``surrogateescape``, so undecodable
    bytes are kept rather than collapsed into a replacement character.
    """
    if isinstance(content, bytes):
        text = content.decode("utf-8", errors="surrogateescape")
    else:
        text = content
    if text.startswith("\ufeff"):
        text = text[1:]
    text = text.replace("\r\n", "\n")
    return "\n".join(line.rstrip() for line in text.split("\n"))


def content_hash(content: bytes | str) -> str:
    """Compute the tagged fingerprint of *content*."""
    normalised = normalize_content(content)
    digest = hashlib.sha256(
        normalised.encode("utf-8", errors="surrogateescape")
    ).hexdigest()
    return FINGERPRINT_PREFIX + digest


def hash_file(path: Path) -> str:
    """Fingerprint the file at *path*.

    Raises:
        HashingIOError: If the file cannot be read (missing, locked,
            a directory, permission denied).
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise HashingIOError(path, exc.strerror or str(exc)) from exc
    return content_hash(raw)


def is_fingerprint(value: object) -> bool:
    """Return ``True`` if *value* looks like a tagged SHA-256 fingerprint."""
    if not isinstance(value, str) or not value.startswith(FINGERPRINT_PREFIX):
        return False
    digest = value[len(FINGERPRINT_PREFIX) :]
    return len(digest) == 64 and all(
        c in "0123456789abcdef" for c in digest
    )
