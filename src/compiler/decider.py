# src/compiler/decider.py — v1
"""Recompilation decider: recompile, reuse, or skip the check entirely.

A path is recompiled when its source digest differs from the previous run's,
or when the output recorded for it is no longer on disk. Plain passes that
follow a digest pass trust the digest pass and skip the check.
"""

from __future__ import annotations

import logging
from pathlib import Path

from assetforge.compiler.models import Decision, DigestStore, RunMode
from assetforge.resolver.base_resolver import BaseAssetResolver

logger = logging.getLogger(__name__)


class RecompilationDecider:
    """Per-path recompilation check.

    Records the source digest of every decided path into ``new_store``.
    """

    def __init__(
        self,
        resolver: BaseAssetResolver,
        target: Path,
        mode: RunMode,
        current_store: DigestStore,
        new_store: DigestStore,
    ) -> None:
        self._resolver = resolver
        self._target = target
        self._mode = mode
        self._current = current_store
        self._new = new_store

    def decide(self, logical_path: str) -> Decision:
        """Decide what to do with a logical path.

        Args:
            logical_path: Asset identifier from the resolver.

        Returns:
            SKIP_CHECK in a plain pass after a digest pass, RECOMPILE when the
            sources changed or the recorded output is missing, REUSE otherwise.
        """
        if self._mode.nondigest_after_digest:
            copied = self._current.source_digests.get(logical_path)
            if copied is not None:
                self._new.source_digests[logical_path] = copied
            return Decision.SKIP_CHECK

        sources_digest = self._resolver.sources_digest(logical_path)
        self._new.source_digests[logical_path] = sources_digest

        if sources_digest != self._current.source_digests.get(logical_path):
            return Decision.RECOMPILE

        recorded = self._current.asset_digests.get(logical_path)
        if not recorded or not (self._target / recorded).is_file():
            logger.debug(
                "Output for %s is missing (%s), recompiling", logical_path, recorded
            )
            return Decision.RECOMPILE

        return Decision.REUSE
