# src/compiler/sweeper.py — v2
"""Remove output files the manifest no longer references.

Files are deleted first, then directories are visited deepest-first so a
directory emptied by the file pass, or by removing its children, goes too.
The sweep root may be the target itself or one of its ancestors; manifest
entries are relative to the target and get rebased onto the root.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from assetforge.compiler.models import MANIFEST_FILENAME, DigestStore

logger = logging.getLogger(__name__)


def target_prefix(target: Path, root: Path) -> str:
    """POSIX path of ``target`` relative to ``root`` ("" when they are equal).

    Raises:
        ValueError: If the target does not live under the sweep root.
    """
    try:
        relative = Path(target).resolve().relative_to(Path(root).resolve())
    except ValueError as e:
        raise ValueError(f"Target {target} is not inside cleanup root {root}") from e
    return "" if relative == Path(".") else relative.as_posix()


class CleanupSweeper:
    """Deletes unknown files and empty directories under ``root``."""

    def __init__(
        self,
        root: Path,
        manifest_filename: str = MANIFEST_FILENAME,
        target: Path | None = None,
    ) -> None:
        self._root = Path(root)
        self._manifest_filename = manifest_filename
        self._prefix = target_prefix(target, self._root) if target is not None else ""

    def known_files(self, store: DigestStore) -> set[str]:
        """Root-relative paths that must survive, with their ``.gz`` variants."""
        known = store.known_files()
        known.add(self._manifest_filename)
        if self._prefix:
            known = {str(PurePosixPath(self._prefix, f)) for f in known}
        known.update({f"{f}.gz" for f in known})
        return known

    def sweep(self, store: DigestStore) -> tuple[list[str], list[str]]:
        """Delete stale files, then empty directories.

        Returns:
            Tuple of (deleted files, deleted directories), relative to root.
        """
        if not self._root.is_dir():
            return [], []

        known = self.known_files(store)
        deleted_files: list[str] = []
        for path in sorted(self._root.rglob("*")):
            if path.is_dir():
                continue
            relative = path.relative_to(self._root).as_posix()
            if relative not in known:
                path.unlink()
                deleted_files.append(relative)
                logger.debug("Deleted old asset at %s", relative)

        deleted_dirs: list[str] = []
        for path in sorted(self._root.rglob("*"), reverse=True):
            if path.is_dir() and not path.is_symlink() and not any(path.iterdir()):
                path.rmdir()
                relative = path.relative_to(self._root).as_posix()
                deleted_dirs.append(relative)
                logger.debug("Deleted empty directory at %s", relative)

        return deleted_files, deleted_dirs
