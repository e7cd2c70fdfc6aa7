"""SHA-256 content hashing for skipping unchanged output files"""

import hashlib


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def file_sha256(path) -> str | None:
    """Return the hash of an existing text file's content, or None if it does not exist."""
    try:
        with open(path, encoding="utf-8") as fh:
            return sha256(fh.read())
    except (FileNotFoundError, UnicodeDecodeError):
        return None
