# src/compiler/writer.py — v2
"""Write compiled assets under the target directory, plus gzip companions."""

from __future__ import annotations

import gzip
import logging
import re
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_ZIP_FILES = r"\.(?:css|html|js|svg|txt|xml)$"


class WritableAsset(Protocol):
    logical_path: str
    digest_path: str
    content: bytes

    def write_to(self, filename: str | Path) -> None: ...


class AssetWriter:
    """Writes assets to ``target`` under their digest or plain path."""

    def __init__(
        self,
        target: Path,
        digest: bool = True,
        zip_files: re.Pattern[str] | str | None = None,
    ) -> None:
        self._target = target
        self._digest = digest
        if zip_files is None or isinstance(zip_files, str):
            zip_files = re.compile(zip_files or DEFAULT_ZIP_FILES)
        self._zip_files = zip_files

    def path_for(self, asset: WritableAsset) -> str:
        """Output path of an asset relative to the target."""
        return asset.digest_path if self._digest else asset.logical_path

    def compressible(self, path: str) -> bool:
        """Whether a target-relative output path gets a ``.gz`` companion."""
        return self._zip_files.search(path) is not None

    def write(self, asset: WritableAsset) -> str:
        """Write the asset and, if compressible, a gzipped ``.gz`` sibling.

        Returns:
            The output path, for recording in the digest store.

        Raises:
            OSError: On any directory creation or write failure.
        """
        path = self.path_for(asset)
        filename = self._target / path
        filename.parent.mkdir(parents=True, exist_ok=True)
        asset.write_to(filename)
        if self.compressible(path):
            # mtime pinned so identical content gives identical .gz bytes
            Path(f"{filename}.gz").write_bytes(gzip.compress(asset.content, mtime=0))
            logger.debug("Wrote %s (+ .gz)", path)
        else:
            logger.debug("Wrote %s", path)
        return path
