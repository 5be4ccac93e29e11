# src/compiler/compiler_factory.py — v1
"""Factory: build a StaticCompiler from Settings."""

from __future__ import annotations

from assetforge.compiler.manifest import load_manifest
from assetforge.compiler.models import CompileResult, DigestStore
from assetforge.compiler.static_compiler import StaticCompiler
from assetforge.config.settings import Settings
from assetforge.resolver.base_resolver import BaseAssetResolver


def create_compiler(
    settings: Settings,
    resolver: BaseAssetResolver,
    store: DigestStore | None = None,
) -> StaticCompiler:
    """Create a compiler configured from settings.

    Args:
        settings: Application settings (ASSETS_* env vars).
        resolver: Asset Resolver to compile from.
        store: Previous digests. Loaded from the target's manifest.yml when
            omitted.

    Returns:
        StaticCompiler ready for ``compile()``.
    """
    if store is None:
        store = load_manifest(settings.assets_target)

    return StaticCompiler(
        resolver,
        settings.assets_target,
        settings.assets_paths_list,
        digest=settings.assets_digest,
        manifest=settings.assets_manifest,
        clean_after_precompile=settings.assets_clean_after_precompile,
        digest_precompiled=settings.assets_digest_precompiled,
        source_digests=store.source_digests,
        asset_digests=store.asset_digests,
        zip_files=settings.zip_files_pattern,
        cleanup_root=settings.cleanup_root,
    )


def create_nondigest_compiler(
    settings: Settings,
    resolver: BaseAssetResolver,
    digest_result: CompileResult,
) -> StaticCompiler:
    """Create the plain pass that follows a digest pass in the same process.

    The digest pass's result replaces any manifest on disk, and the pass runs
    with digest mode off so it copies outputs instead of compiling them.
    """
    overrides = settings.model_copy(
        update={
            "assets_digest": False,
            "assets_digest_precompiled": digest_result.digest_precompiled,
        }
    )
    return create_compiler(overrides, resolver, store=digest_result.store)
