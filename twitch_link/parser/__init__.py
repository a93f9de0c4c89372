"""Parsing helpers for usher master playlists."""

from .manifest_parser import parse_manifest, parse_manifest_lines, split_manifest_lines

__all__ = ["parse_manifest", "parse_manifest_lines", "split_manifest_lines"]
