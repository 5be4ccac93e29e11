# src/logging/__init__.py — v1
"""Logger factory, formatters and contextual logging."""
