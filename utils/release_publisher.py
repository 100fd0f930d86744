#!/usr/bin/env python3
"""Write compiled notes into a draft GitHub Release.

This module composes the release title and body, validates the body size,
and issues the single update call. It never flips a release from draft to
published; a maintainer reviews and publishes by hand.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from configs.config import Config
from utils.github_client import GithubClient
from utils.markdown_renderer import render_release_body
from utils.release_models import ChecksumEntry, Release

logger = logging.getLogger(__name__)


class ReleasePublishError(Exception):
    def __init__(self, message: str, code: str = "UNKNOWN"):
        super().__init__(message)
        self.code = code


class ReleasePublisher:
    def __init__(self, client: GithubClient, *, product_label: Optional[str] = None, body_max_chars: Optional[int] = None):
        self.client = client
        self.product_label = product_label or Config.PRODUCT_LABEL
        self.body_max_chars = body_max_chars if body_max_chars is not None else Config.RELEASE_BODY_MAX_CHARS

    # -------- Public API --------
    def release_title(self, tag_name: str) -> str:
        """Human-readable title: `v2.30.0` becomes `Git 2.30.0`."""
        version = tag_name[1:] if tag_name and not tag_name[0].isdigit() else tag_name
        return f"{self.product_label} {version}"

    def compose_body(self, changelog: List[str], checksums: List[ChecksumEntry]) -> str:
        body = render_release_body(changelog, checksums)
        self._validate_body(body)
        return body

    def publish(
        self,
        owner: str,
        repo: str,
        release: Release,
        changelog: List[str],
        checksums: List[ChecksumEntry],
    ) -> Release:
        body = self.compose_body(changelog, checksums)
        updated = self.client.update_release(
            owner,
            repo,
            release.id,
            tag_name=release.tag_name,
            name=self.release_title(release.tag_name),
            body=body,
        )
        logger.info(f"✅ Draft for release {release.tag_name} updated with changelog and artifacts")
        logger.info("")
        logger.info(f"💚 Please review draft release and publish: {updated.html_url}")
        return updated

    def _validate_body(self, body: str) -> None:
        if not body:
            raise ReleasePublishError("Empty release body", code="VALIDATION")
        if len(body) > self.body_max_chars:
            raise ReleasePublishError(
                f"Release body exceeds limit: len={len(body)} max={self.body_max_chars}",
                code="VALIDATION",
            )
