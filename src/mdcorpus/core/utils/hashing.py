"""SHA-256 hashing for document change detection and collection fingerprints"""

import hashlib
from typing import Iterable


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def sha256_lines(lines: Iterable[str]) -> str:
    """Hash an ordered sequence of strings, one per line."""
    h = hashlib.sha256()
    for line in lines:
        h.update(line.encode("utf-8"))
        h.update(b"\n")
    return h.hexdigest()
