#!/usr/bin/env python3
"""Best-effort lookup of the CI build that produces release artifacts."""

from __future__ import annotations

import json
import logging
from typing import Optional

from .github_client import GithubClient, GithubApiError, GithubAuthError

logger = logging.getLogger(__name__)


def report_build_status(
    client: GithubClient,
    owner: str,
    repo: str,
    ref: str,
    context: str,
    issue_url: str,
) -> Optional[str]:
    """Log where to follow the build for `ref` and return its URL.

    Never raises: a failed lookup only degrades the diagnostic.
    """
    try:
        statuses = client.list_commit_statuses(owner, repo, ref)
    except (GithubApiError, GithubAuthError) as e:
        logger.warning(f"Could not look up commit statuses for {ref}: {e}")
        return None

    match = next((s for s in statuses if s.context == context), None)
    if match is None:
        contexts = [s.context for s in statuses]
        logger.info(f"👀 Uh-oh, I couldn't find the right commit status. Found these contexts: {json.dumps(contexts)}")
        logger.info(f"Please open an issue against {issue_url} so it can be fixed!")
        return None

    logger.info(f"👀 Follow along with the build here: {match.target_url}")
    return match.target_url
