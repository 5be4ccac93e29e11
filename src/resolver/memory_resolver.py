# src/resolver/memory_resolver.py — v1
"""Dict-backed Asset Resolver.

Useful for hosts that already hold source bytes in memory and for tests.
Logical paths are enumerated in insertion order and filtered with glob
patterns; source digests cover the path's own bytes plus its declared
dependencies, transitively.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Iterable, Iterator
from fnmatch import fnmatchcase

from assetforge.compiler.digests import digest_path_for, hexdigest
from assetforge.resolver.base_resolver import BaseAssetResolver
from assetforge.resolver.models import CompiledAsset

logger = logging.getLogger(__name__)

CompileFn = Callable[[str, bytes], bytes | None]


class InMemoryResolver(BaseAssetResolver):
    """Resolver over an in-memory mapping of logical path -> source bytes."""

    def __init__(
        self,
        sources: dict[str, bytes | str] | None = None,
        dependencies: dict[str, list[str]] | None = None,
        compile_fn: CompileFn | None = None,
    ) -> None:
        self._sources: dict[str, bytes] = {}
        self._dependencies: dict[str, list[str]] = {}
        self._compile_fn = compile_fn
        self.compiled: list[str] = []

        for logical_path, content in (sources or {}).items():
            self.add(logical_path, content, (dependencies or {}).get(logical_path))

    def add(
        self,
        logical_path: str,
        content: bytes | str,
        depends_on: list[str] | None = None,
    ) -> None:
        """Add or replace a source."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._sources[logical_path] = content
        self._dependencies[logical_path] = list(depends_on or [])

    def remove(self, logical_path: str) -> None:
        """Forget a source and its dependency list."""
        self._sources.pop(logical_path, None)
        self._dependencies.pop(logical_path, None)

    def each_logical_path(self, paths: Iterable[str] | None = None) -> Iterator[str]:
        """Yield logical paths matching any glob in ``paths`` (all if empty)."""
        filters = list(paths or [])
        for logical_path in list(self._sources):
            if not filters or any(fnmatchcase(logical_path, f) for f in filters):
                yield logical_path

    def sources_digest(self, logical_path: str) -> str:
        """MD5 over the path's bytes followed by each transitive dependency's."""
        h = hashlib.md5()  # noqa: S324
        for path in self._closure(logical_path):
            h.update(self._sources[path])
        return h.hexdigest()

    def find_asset(self, logical_path: str) -> CompiledAsset | None:
        """Compile a logical path; None if it is unknown or compiles to nothing."""
        source = self._sources.get(logical_path)
        if source is None:
            return None

        content = self._compile_fn(logical_path, source) if self._compile_fn else source
        if content is None:
            logger.debug("Resolver produced no asset for %s", logical_path)
            return None

        self.compiled.append(logical_path)
        return CompiledAsset(
            logical_path=logical_path,
            digest_path=digest_path_for(logical_path, hexdigest(content)),
            content=content,
        )

    def _closure(self, logical_path: str) -> list[str]:
        """Depth-first list of the path and its dependencies, each once."""
        if logical_path not in self._sources:
            raise KeyError(f"Unknown logical path: {logical_path!r}")

        ordered: list[str] = []
        seen: set[str] = set()
        stack = [logical_path]
        while stack:
            path = stack.pop()
            if path in seen:
                continue
            if path not in self._sources:
                raise KeyError(f"Unknown dependency {path!r} of {logical_path!r}")
            seen.add(path)
            ordered.append(path)
            stack.extend(reversed(self._dependencies.get(path, [])))
        return ordered
