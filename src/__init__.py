# src/__init__.py — v1
"""assetforge — incremental static-asset compiler."""

from assetforge.version import __version__

__all__ = ["__version__"]
