# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides an in-memory resolver with a small asset set, a target directory
and a compiler factory. Filesystem work happens under tmp_path only.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from assetforge.compiler.static_compiler import StaticCompiler
from assetforge.logging.context import clear_context
from assetforge.resolver.memory_resolver import InMemoryResolver


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


# === FIXTURES: Sources ===


@pytest.fixture
def sample_sources() -> dict[str, bytes]:
    """One JS and one CSS asset with distinct content."""
    return {
        "a.js": b"console.log('a');\n",
        "b.css": b"body { color: red; }\n",
    }


@pytest.fixture
def resolver(sample_sources: dict[str, bytes]) -> InMemoryResolver:
    """Resolver over sample_sources, identity compile."""
    return InMemoryResolver(sources=dict(sample_sources))


# === FIXTURES: Target ===


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Output directory (not created, the compiler creates it)."""
    return tmp_path / "public" / "assets"


@pytest.fixture
def make_compiler(
    target_dir: Path,
) -> Callable[..., StaticCompiler]:
    """Build a StaticCompiler against target_dir with keyword overrides."""

    def _make(resolver: InMemoryResolver, **options: object) -> StaticCompiler:
        return StaticCompiler(resolver, target_dir, **options)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def files_under() -> Callable[[Path], set[str]]:
    """Relative POSIX paths of every file under a root."""

    def _files(root: Path) -> set[str]:
        return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}

    return _files
