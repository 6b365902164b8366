"""
Content hashing: SHA-256 digests for change detection and file fingerprints.

Structured values are hashed through a compact JSON rendering that keeps
mapping insertion order as-is.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def hash_text(content: str | bytes) -> str:
    """Return the 64-char hex SHA-256 digest of *content*."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def hash_structured(value: Any) -> str:
    """Hash a JSON-serializable value in its canonical textual form."""
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return hash_text(text)
