# src/compiler/manifest.py — v1
"""Read and write manifest.yml, the compiler's only state between runs."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from assetforge.compiler.models import MANIFEST_FILENAME, DigestStore

logger = logging.getLogger(__name__)


def manifest_path(target: Path) -> Path:
    """Return the manifest location for a target directory."""
    return Path(target) / MANIFEST_FILENAME


def write_manifest(target: Path, store: DigestStore) -> Path:
    """Persist ``store`` to ``target/manifest.yml``, replacing any previous one.

    Args:
        target: Output directory (created if missing).
        store: Digests accumulated over the whole pass.

    Returns:
        Path of the written manifest.
    """
    target = Path(target)
    target.mkdir(parents=True, exist_ok=True)
    path = manifest_path(target)
    data = {
        "source_digests": dict(store.source_digests),
        "asset_digests": dict(store.asset_digests),
    }
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
    logger.debug("Wrote manifest with %d assets to %s", len(store.asset_digests), path)
    return path


def load_manifest(target: Path) -> DigestStore:
    """Load the digests persisted by the previous run.

    A missing manifest means a first run. An unreadable or malformed one is
    logged and treated the same way, which forces full recompilation.
    """
    path = manifest_path(target)
    if not path.exists():
        return DigestStore()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        return DigestStore(
            source_digests=data.get("source_digests") or {},
            asset_digests=data.get("asset_digests") or {},
        )
    except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
        logger.warning("Failed to read manifest %s: %s", path, e)
        return DigestStore()
