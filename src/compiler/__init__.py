# src/compiler/__init__.py — v1
"""Incremental compilation: decide, write, project, persist, sweep."""
