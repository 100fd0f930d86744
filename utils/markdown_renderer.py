#!/usr/bin/env python3
from __future__ import annotations

from typing import List

from utils.release_models import ChecksumEntry


def render_changelog(lines: List[str]) -> str:
	return "\n".join(lines or [])


def render_checksums(entries: List[ChecksumEntry]) -> str:
	# Each entry ends with its own newline; entries are separated by a blank line
	return "\n".join(f"**{e.file_name}**\n{e.checksum}\n" for e in (entries or []))


def render_release_body(changelog: List[str], checksums: List[ChecksumEntry]) -> str:
	return f"""{render_changelog(changelog)}

## SHA-256 hashes:

{render_checksums(checksums)}"""
