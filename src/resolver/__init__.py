# src/resolver/__init__.py — v1
"""Asset Resolver capability interface and implementations."""
