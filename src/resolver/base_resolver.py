# src/resolver/base_resolver.py — v1
"""Abstract Asset Resolver interface.

The resolver owns everything upstream of compiled bytes: discovering logical
paths, digesting raw sources, and running the transformation pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from assetforge.resolver.models import CompiledAsset


class BaseAssetResolver(ABC):
    """Capability interface consumed by the static compiler."""

    @abstractmethod
    def each_logical_path(self, paths: Iterable[str] | None = None) -> Iterator[str]:
        """Yield logical paths matching any filter in ``paths`` (all if empty)."""

    @abstractmethod
    def sources_digest(self, logical_path: str) -> str:
        """Digest over every raw source that contributes to the logical path."""

    @abstractmethod
    def find_asset(self, logical_path: str) -> CompiledAsset | None:
        """Compile a logical path; None when it cannot be resolved."""
