"""SHA-256 fingerprints used to drop repeated blocks"""

import hashlib
import re


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def block_fingerprint(text: str) -> str:
    """Hash of a block with whitespace runs collapsed, so reflowed copies compare equal."""
    return sha256(re.sub(r"\s+", " ", text).strip().lower())
