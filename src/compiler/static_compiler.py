# src/compiler/static_compiler.py — v2
"""Incremental static-asset compiler.

One sequential pass over the resolver's logical paths:

    1. Decide per path: recompile, reuse, or skip the check
    2. Recompile -> resolve and write (digest or plain path, + .gz)
       Reuse     -> keep the previously recorded output path
       Skip      -> keep the digest pass's output path and project a plain copy
    3. Persist manifest.yml (manifest mode)
    4. Sweep files the manifest does not reference (manifest + clean mode)

Any resolver or I/O exception aborts the pass and leaves the target as is.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from assetforge.compiler.decider import RecompilationDecider
from assetforge.compiler.manifest import write_manifest
from assetforge.compiler.models import CompileResult, Decision, DigestStore, RunMode
from assetforge.compiler.projector import NonDigestProjector
from assetforge.compiler.sweeper import CleanupSweeper
from assetforge.compiler.writer import AssetWriter
from assetforge.logging.context import set_asset_context, set_run_context
from assetforge.resolver.base_resolver import BaseAssetResolver

logger = logging.getLogger(__name__)


def generate_run_id(timestamp: datetime | None = None) -> str:
    """Generate a run_id: yyyymmdd_hhmmss_{uuid4_short}."""
    ts = timestamp or datetime.now(timezone.utc)
    return f"{ts.strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:5]}"


class StaticCompiler:
    """Compile only what changed, record it, and prune the rest."""

    def __init__(
        self,
        resolver: BaseAssetResolver,
        target: str | Path,
        paths: Iterable[str] | None = None,
        *,
        digest: bool = True,
        manifest: bool = True,
        clean_after_precompile: bool = True,
        digest_precompiled: bool = False,
        source_digests: dict[str, str] | None = None,
        asset_digests: dict[str, str] | None = None,
        zip_files: re.Pattern[str] | str | None = None,
        cleanup_root: str | Path | None = None,
    ) -> None:
        """Initialize a compile pass.

        Args:
            resolver: Asset Resolver providing paths, digests and assets.
            target: Output directory; output paths are relative to it.
            paths: Logical path filters handed to the resolver.
            digest: Write content-addressed output paths.
            manifest: Persist manifest.yml (and allow cleanup).
            clean_after_precompile: Sweep unreferenced files after the pass.
            digest_precompiled: A digest pass already ran; with ``digest``
                off this pass copies its outputs instead of compiling.
            source_digests: Previous run's logical path -> source digest.
            asset_digests: Previous run's logical path -> output path.
            zip_files: Pattern of output paths that also get a ``.gz``.
            cleanup_root: Directory to sweep, ``target`` or an ancestor of it
                (defaults to ``target``).

        Raises:
            ValueError: If ``target`` is not inside ``cleanup_root``.
        """
        self.resolver = resolver
        self.target = Path(target)
        self.paths = list(paths or [])
        self.mode = RunMode(
            digest=digest,
            manifest=manifest,
            clean_after_precompile=clean_after_precompile,
            digest_precompiled=digest_precompiled,
        )
        self.current_store = DigestStore(
            source_digests=dict(source_digests or {}),
            asset_digests=dict(asset_digests or {}),
        )
        self.new_store = DigestStore()

        self._decider = RecompilationDecider(
            resolver, self.target, self.mode, self.current_store, self.new_store
        )
        self._writer = AssetWriter(self.target, digest=digest, zip_files=zip_files)
        self._projector = NonDigestProjector(
            self.target, self.current_store, self.new_store
        )
        self._sweeper = CleanupSweeper(
            Path(cleanup_root) if cleanup_root is not None else self.target,
            target=self.target,
        )

    def compile(self) -> CompileResult:
        """Run the pass.

        Returns:
            CompileResult with the new digests and per-path outcomes; the host
            passes its digests and ``digest_precompiled`` to the next pass.

        Raises:
            OSError: On any filesystem failure.
            Exception: Whatever the resolver raises.
        """
        result = CompileResult(run_id=generate_run_id())
        set_run_context(result.run_id)
        logger.info(
            "Precompiling assets into %s (digest=%s, nondigest_after_digest=%s)",
            self.target, self.mode.digest, self.mode.nondigest_after_digest,
        )

        try:
            for logical_path in self.resolver.each_logical_path(self.paths):
                self._compile_path(logical_path, result)

            if self.mode.manifest:
                set_asset_context(None, "manifest")
                write_manifest(self.target, self.new_store)

                if self.mode.sweep_enabled:
                    set_asset_context(None, "sweep")
                    files, dirs = self._sweeper.sweep(self.new_store)
                    result.deleted_files.extend(files)
                    result.deleted_dirs.extend(dirs)
        finally:
            set_asset_context(None, None)

        result.source_digests = dict(self.new_store.source_digests)
        result.asset_digests = dict(self.new_store.asset_digests)
        # Digest pass marks its outputs reusable for a following plain pass
        result.digest_precompiled = self.mode.digest or self.mode.digest_precompiled

        logger.info(
            "Precompile done: %d compiled, %d reused, %d projected, %d skipped, "
            "%d stale files removed",
            len(result.compiled), len(result.reused), len(result.projected),
            len(result.skipped), len(result.deleted_files),
        )
        return result

    def _compile_path(self, logical_path: str, result: CompileResult) -> None:
        set_asset_context(logical_path, "decide")
        decision = self._decider.decide(logical_path)

        if decision is Decision.RECOMPILE:
            set_asset_context(logical_path, "write")
            asset = self.resolver.find_asset(logical_path)
            if asset is None:
                logger.debug("Skipping %s, resolver returned no asset", logical_path)
                result.skipped.append(logical_path)
                return
            self.new_store.asset_digests[logical_path] = self._writer.write(asset)
            result.compiled.append(logical_path)
            return

        recorded = self.current_store.asset_digests.get(logical_path)
        if recorded is None:
            logger.debug("Skipping %s, no output recorded by digest pass", logical_path)
            result.skipped.append(logical_path)
            return
        self.new_store.asset_digests[logical_path] = recorded

        if decision is Decision.SKIP_CHECK:
            set_asset_context(logical_path, "project")
            self._projector.project(logical_path)
            result.projected.append(logical_path)
        else:
            sources_digest = self.new_store.source_digests.get(logical_path, "")
            logger.debug(
                "Not compiling %s, sources digest has not changed (%s)",
                logical_path, sources_digest[:7],
            )
            result.reused.append(logical_path)
