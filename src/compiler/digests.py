# src/compiler/digests.py — v1
"""Content-addressed naming helpers.

Digest output paths embed a 32-char lowercase hex digest between the stem
and the extension: ``app.js`` -> ``app-<digest>.js``.
"""

from __future__ import annotations

import hashlib
import re
from posixpath import splitext

DIGEST_RE = re.compile(r"([0-9a-f]{32})")


def hexdigest(content: bytes) -> str:
    """MD5 hex digest used for content-addressed names."""
    return hashlib.md5(content).hexdigest()  # noqa: S324


def digest_path_for(logical_path: str, digest: str) -> str:
    """Return the content-addressed path for a logical path.

    The digest goes before the last extension of the final path segment,
    so ``vendor/jquery.min.js`` becomes ``vendor/jquery.min-<digest>.js``.
    """
    stem, ext = splitext(logical_path)
    return f"{stem}-{digest}{ext}"


def extract_digest(path: str | None) -> str | None:
    """Return the first embedded hex digest in an output path, if any."""
    if not path:
        return None
    match = DIGEST_RE.search(path)
    return match.group(1) if match else None
