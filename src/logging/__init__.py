"""Logging setup and per-request context."""
