# tests/unit/resolver/test_base_resolver.py — v1
"""Tests for resolver/base_resolver.py — BaseAssetResolver ABC."""

from __future__ import annotations

import pytest

from assetforge.resolver.base_resolver import BaseAssetResolver


class TestBaseAssetResolver:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseAssetResolver()  # type: ignore[abstract]

    def test_has_required_methods(self):
        for method in ["each_logical_path", "sources_digest", "find_asset"]:
            assert hasattr(BaseAssetResolver, method)
