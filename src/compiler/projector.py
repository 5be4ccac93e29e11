# src/compiler/projector.py — v1
"""Plain-named copies of already-written digest assets.

Used by a non-digest pass that follows a digest pass: instead of compiling
every asset a second time, the digest output is copied to its logical path.
JS and CSS have the ``-<digest>`` suffixes of known assets removed first, so
references inside the copy point at plain names too.
"""

from __future__ import annotations

import logging
import re
import shutil
from functools import cached_property
from pathlib import Path

from assetforge.compiler.digests import extract_digest
from assetforge.compiler.models import DigestStore

logger = logging.getLogger(__name__)

_TEXT_ASSET_RE = re.compile(r"\.(js|css)$")


class NonDigestProjector:
    """Project digest outputs onto their logical paths."""

    def __init__(
        self,
        target: Path,
        current_store: DigestStore,
        new_store: DigestStore,
    ) -> None:
        self._target = target
        self._current = current_store
        self._new = new_store

    @cached_property
    def known_digests(self) -> list[str]:
        """Digest tokens embedded in the output paths of the current store."""
        digests = (extract_digest(p) for p in self._current.asset_digests.values())
        return [d for d in digests if d]

    def project(self, logical_path: str) -> Path:
        """Copy the digest output of ``logical_path`` to ``target/logical_path``.

        Returns:
            The written plain file.

        Raises:
            KeyError: If no output path is recorded for the logical path.
            OSError: If reading the digest file or writing the copy fails.
        """
        digest_path = self._new.asset_digests[logical_path]
        source = self._target / digest_path
        destination = self._target / logical_path
        if source == destination:
            return destination

        destination.parent.mkdir(parents=True, exist_ok=True)

        if _TEXT_ASSET_RE.search(str(source)):
            content = source.read_bytes()
            for digest in self.known_digests:
                content = content.replace(f"-{digest}".encode("ascii"), b"")
            destination.write_bytes(content)
            logger.debug("Stripped digests and copied %s to %s", digest_path, logical_path)
        else:
            destination.unlink(missing_ok=True)
            shutil.copyfile(source, destination)
            logger.debug("Copied %s to %s", digest_path, logical_path)

        return destination
