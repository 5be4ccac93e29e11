# tests/unit/resolver/test_memory_resolver.py — v1
"""Tests for resolver/memory_resolver.py — dict-backed Asset Resolver."""

from __future__ import annotations

import pytest

from assetforge.compiler.digests import hexdigest
from assetforge.resolver.memory_resolver import InMemoryResolver


class TestEachLogicalPath:
    def test_insertion_order(self):
        r = InMemoryResolver({"b.css": b"b", "a.js": b"a", "img/x.png": b"x"})
        assert list(r.each_logical_path()) == ["b.css", "a.js", "img/x.png"]

    def test_glob_filters(self):
        r = InMemoryResolver({"b.css": b"b", "a.js": b"a", "img/x.png": b"x"})
        assert list(r.each_logical_path(["*.js", "img/*"])) == ["a.js", "img/x.png"]

    def test_is_lazy_and_restartable(self):
        r = InMemoryResolver({"a.js": b"a"})
        gen = r.each_logical_path()
        assert next(gen) == "a.js"
        assert list(r.each_logical_path()) == ["a.js"]


class TestSourcesDigest:
    def test_changes_with_content(self):
        r = InMemoryResolver({"a.js": b"a"})
        before = r.sources_digest("a.js")
        r.add("a.js", b"a2")
        assert r.sources_digest("a.js") != before

    def test_includes_dependencies(self):
        r = InMemoryResolver(
            {"app.js": b"app", "lib.js": b"lib"}, dependencies={"app.js": ["lib.js"]}
        )
        before = r.sources_digest("app.js")
        r.add("lib.js", b"lib v2")
        assert r.sources_digest("app.js") != before

    def test_transitive_and_cyclic(self):
        r = InMemoryResolver(
            {"a.js": b"a", "b.js": b"b", "c.js": b"c"},
            dependencies={"a.js": ["b.js"], "b.js": ["c.js", "a.js"]},
        )
        before = r.sources_digest("a.js")
        r.add("c.js", b"c2", depends_on=[])
        assert r.sources_digest("a.js") != before

    def test_unknown_path_raises(self):
        with pytest.raises(KeyError):
            InMemoryResolver().sources_digest("nope.js")

    def test_unknown_dependency_raises(self):
        r = InMemoryResolver({"a.js": b"a"}, dependencies={"a.js": ["ghost.js"]})
        with pytest.raises(KeyError, match="ghost.js"):
            r.sources_digest("a.js")


class TestFindAsset:
    def test_identity_compile(self):
        r = InMemoryResolver({"img/logo.png": b"png"})
        asset = r.find_asset("img/logo.png")
        assert asset is not None
        assert asset.content == b"png"
        assert asset.digest_path == f"img/logo-{hexdigest(b'png')}.png"
        assert r.compiled == ["img/logo.png"]

    def test_str_sources_are_utf8(self):
        asset = InMemoryResolver({"a.txt": "é"}).find_asset("a.txt")
        assert asset is not None
        assert asset.content == "é".encode()

    def test_compile_fn(self):
        r = InMemoryResolver({"a.js": b"  a  "}, compile_fn=lambda _p, src: src.strip())
        asset = r.find_asset("a.js")
        assert asset is not None
        assert asset.content == b"a"

    def test_unknown_returns_none(self):
        assert InMemoryResolver().find_asset("x.js") is None

    def test_compile_fn_none_returns_none(self):
        r = InMemoryResolver({"a.js": b"a"}, compile_fn=lambda _p, _s: None)
        assert r.find_asset("a.js") is None
        assert r.compiled == []

    def test_remove(self):
        r = InMemoryResolver({"a.js": b"a"})
        r.remove("a.js")
        assert list(r.each_logical_path()) == []
