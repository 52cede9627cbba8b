"""SHA-256 hashing of raw post text for change detection"""

import hashlib


def sha256(text: str) -> str:
    """Hex digest of the UTF-8 text; 64 chars, stored as posts.content_hash."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
