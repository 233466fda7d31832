"""Shared utilities: logging and app paths."""
