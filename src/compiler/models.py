# src/compiler/models.py — v1
"""Compiler domain models: DigestStore, RunMode, Decision, CompileResult."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

MANIFEST_FILENAME = "manifest.yml"


class Decision(str, Enum):
    """Per-path outcome of the recompilation check."""

    RECOMPILE = "recompile"
    REUSE = "reuse"
    SKIP_CHECK = "skip_check"


class DigestStore(BaseModel):
    """Logical path -> source digest and logical path -> output path mappings.

    This is exactly what gets persisted to manifest.yml.
    """

    source_digests: dict[str, str] = Field(default_factory=dict)
    asset_digests: dict[str, str] = Field(default_factory=dict)

    def known_files(self) -> set[str]:
        """Output-tree paths referenced by this store, keys included."""
        files = set(self.asset_digests.values())
        files.update(self.asset_digests.keys())
        return files


class RunMode(BaseModel):
    """Run-wide mode flags for one compile pass."""

    digest: bool = True
    manifest: bool = True
    clean_after_precompile: bool = True
    digest_precompiled: bool = False

    @property
    def nondigest_after_digest(self) -> bool:
        """Plain pass that reuses digests computed by a preceding digest pass."""
        return not self.digest and self.digest_precompiled

    @property
    def sweep_enabled(self) -> bool:
        return self.manifest and self.clean_after_precompile


class CompileResult(BaseModel):
    """State handed back to the host after a pass.

    ``source_digests``, ``asset_digests`` and ``digest_precompiled`` are what a
    following pass needs to run with non-digest-after-digest behavior.
    """

    run_id: str
    source_digests: dict[str, str] = Field(default_factory=dict)
    asset_digests: dict[str, str] = Field(default_factory=dict)
    digest_precompiled: bool = False

    compiled: list[str] = Field(default_factory=list)
    reused: list[str] = Field(default_factory=list)
    projected: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    deleted_files: list[str] = Field(default_factory=list)
    deleted_dirs: list[str] = Field(default_factory=list)

    @property
    def store(self) -> DigestStore:
        """The digests of this pass as a DigestStore."""
        return DigestStore(
            source_digests=dict(self.source_digests),
            asset_digests=dict(self.asset_digests),
        )
