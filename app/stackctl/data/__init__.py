"""Bundled data files for stackctl."""
