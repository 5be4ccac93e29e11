# src/config/settings.py — v3
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for precompilation settings: target directory,
logical path filters, run mode flags, compressible-file pattern and logging.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from assetforge.compiler.writer import DEFAULT_ZIP_FILES


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Output ===
    assets_target: Path = Path("public/assets")
    assets_cleanup_root: Path | None = None

    # === Logical path filters (comma-separated glob patterns, empty = all) ===
    assets_paths: str = ""

    # === Run mode ===
    assets_digest: bool = True
    assets_manifest: bool = True
    assets_clean_after_precompile: bool = True
    assets_digest_precompiled: bool = False

    # === Compression ===
    assets_zip_files: str = DEFAULT_ZIP_FILES

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("assets_zip_files")
    @classmethod
    def validate_zip_files(cls, v: str) -> str:
        """ASSETS_ZIP_FILES must be a valid regular expression."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"assets_zip_files is not a valid pattern: {e}") from e
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not str(self.assets_target).strip() or str(self.assets_target) == ".":
            errors.append("ASSETS_TARGET must name an output directory")

        if self.assets_cleanup_root is not None:
            root = self.assets_cleanup_root.expanduser()
            if root == Path(root.anchor) and root.anchor:
                errors.append("ASSETS_CLEANUP_ROOT must not be a filesystem root")
            elif not _is_within(self.assets_target, root):
                errors.append("ASSETS_TARGET must be inside ASSETS_CLEANUP_ROOT")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def assets_paths_list(self) -> list[str]:
        """Parse comma-separated logical path filters."""
        return [p.strip() for p in self.assets_paths.split(",") if p.strip()]

    @property
    def zip_files_pattern(self) -> re.Pattern[str]:
        """Compiled compressible-file pattern."""
        return re.compile(self.assets_zip_files)

    @property
    def cleanup_root(self) -> Path:
        """Directory swept for stale files (defaults to the target)."""
        return self.assets_cleanup_root or self.assets_target


def _is_within(path: Path, root: Path) -> bool:
    return path.expanduser().resolve().is_relative_to(root.resolve())


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-pass config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
