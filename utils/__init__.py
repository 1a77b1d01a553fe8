"""Shared helpers: logging, timing and text normalization."""
