"""Shared helpers for ghbuild commands."""
