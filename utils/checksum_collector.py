#!/usr/bin/env python3
"""Collect checksum file contents for release artifacts."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .github_client import GithubClient
from .release_models import ChecksumEntry, ReleaseAsset

logger = logging.getLogger(__name__)


def checksum_base_name(name: str, suffix: str) -> Optional[str]:
    """Return the artifact name a checksum file belongs to, or None."""
    if not suffix or not name.endswith(suffix):
        return None
    return name[:-len(suffix)]


def collect_checksums(client: GithubClient, assets: Iterable[ReleaseAsset], suffix: str) -> List[ChecksumEntry]:
    """Download every checksum asset, in asset order.

    Raises:
        AssetDownloadError: If any checksum file cannot be downloaded
    """
    entries: List[ChecksumEntry] = []
    for asset in assets:
        file_name = checksum_base_name(asset.name, suffix)
        if file_name is None:
            continue
        checksum = client.download_asset_text(asset.url)
        logger.debug(f"✓ {file_name}: {checksum}")
        entries.append(ChecksumEntry(file_name=file_name, checksum=checksum))
    return entries
