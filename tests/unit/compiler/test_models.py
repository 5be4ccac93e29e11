# tests/unit/compiler/test_models.py — v1
"""Tests for compiler/models.py — digest store, run mode, result."""

from __future__ import annotations

from assetforge.compiler.models import CompileResult, Decision, DigestStore, RunMode


class TestDigestStore:
    def test_defaults_empty(self):
        store = DigestStore()
        assert store.source_digests == {}
        assert store.asset_digests == {}

    def test_known_files_includes_keys_and_values(self):
        store = DigestStore(asset_digests={"a.js": "a-123.js", "img/x.png": "img/x-9.png"})
        assert store.known_files() == {"a.js", "a-123.js", "img/x.png", "img/x-9.png"}


class TestRunMode:
    def test_defaults(self):
        mode = RunMode()
        assert mode.digest is True
        assert mode.nondigest_after_digest is False
        assert mode.sweep_enabled is True

    def test_nondigest_after_digest(self):
        assert RunMode(digest=False, digest_precompiled=True).nondigest_after_digest
        assert not RunMode(digest=True, digest_precompiled=True).nondigest_after_digest
        assert not RunMode(digest=False, digest_precompiled=False).nondigest_after_digest

    def test_sweep_requires_manifest(self):
        assert RunMode(manifest=False, clean_after_precompile=True).sweep_enabled is False
        assert RunMode(manifest=True, clean_after_precompile=False).sweep_enabled is False


class TestDecision:
    def test_values(self):
        assert Decision("recompile") is Decision.RECOMPILE
        assert Decision.SKIP_CHECK.value == "skip_check"


class TestCompileResult:
    def test_store_is_a_copy(self):
        result = CompileResult(
            run_id="r1", source_digests={"a.js": "s"}, asset_digests={"a.js": "a-1.js"}
        )
        store = result.store
        store.asset_digests["b.js"] = "b.js"
        assert "b.js" not in result.asset_digests
        assert store.source_digests == {"a.js": "s"}
