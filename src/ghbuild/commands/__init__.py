"""Command implementations for the ghbuild CLI."""
