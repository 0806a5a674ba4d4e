"""SHA-256 content hashing and canonical JSON serialization"""

import hashlib
import json
from typing import Any


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content (64 chars)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def canonical_json(data: Any) -> str:
    """Compact JSON with insertion-ordered keys and non-ASCII kept as-is."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
