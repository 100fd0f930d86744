#!/usr/bin/env python3
"""Token scope checks for reading and updating draft releases."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set, Tuple

from .github_client import GithubClient

logger = logging.getLogger(__name__)

# Broader scopes that grant the named scope
IMPLIED_BY: Dict[str, Set[str]] = {
    "public_repo": {"repo"},
}


def has_required_scope(scopes: Optional[List[str]], required: str) -> bool:
    """Return True if the token's scopes grant `required`.

    Tokens with a missing or empty X-OAuth-Scopes header report no classic
    scopes and are accepted; the API decides what they may read.
    """
    granted = {s.strip().lower() for s in scopes or [] if s.strip()}
    if not granted:
        return True
    wanted = required.strip().lower()
    if wanted in granted:
        return True
    return bool(granted & IMPLIED_BY.get(wanted, set()))


def check_credentials(client: GithubClient, required_scope: str) -> Tuple[bool, str]:
    """Look up the token owner and verify the required scope is granted."""
    user = client.get_authenticated_user()
    logger.info(f"✅ Token found for {user.login}")

    if not has_required_scope(user.scopes, required_scope):
        logger.info(
            f"🔴 Found GITHUB_ACCESS_TOKEN does not have required scope '{required_scope}' "
            f"which is required to read draft releases"
        )
        return False, user.login

    logger.info(f"✅ Token has '{required_scope}' scope to make changes to releases")
    return True, user.login
