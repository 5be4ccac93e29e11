# src/resolver/models.py — v2
"""Resolved asset model handed from a resolver to the compiler."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class CompiledAsset(BaseModel):
    """A compiled asset: bytes plus its plain and content-addressed paths.

    Any object exposing ``logical_path``, ``digest_path``, ``content`` and
    ``write_to()`` is accepted by the compiler.
    """

    logical_path: str
    digest_path: str
    content: bytes

    def write_to(self, filename: str | Path) -> None:
        """Write the compiled bytes, unchanged, to ``filename``.

        Parent directories must exist.
        """
        Path(filename).write_bytes(self.content)

    @property
    def size(self) -> int:
        return len(self.content)
