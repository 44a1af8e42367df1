"""Bundled scenario vectors."""
