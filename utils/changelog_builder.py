#!/usr/bin/env python3
"""Changelog assembly from merged pull requests.

Merge commits created by GitHub's "Merge pull request" button embed the
pull request number in their message. The commits between the latest
published release and the draft's tag are scanned for that pattern and each
referenced pull request becomes one changelog line.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List

from .github_client import GithubClient
from .release_models import CommitInfo, PullRequestSummary

logger = logging.getLogger(__name__)

MERGE_COMMIT_PATTERN = re.compile(r"Merge pull request #(\d+) ")


def extract_pull_request_ids(commits: Iterable[CommitInfo]) -> List[int]:
    """Return pull request numbers from merge commit messages, in commit order.

    Repeated numbers are kept as-is.
    """
    ids: List[int] = []
    for commit in commits:
        match = MERGE_COMMIT_PATTERN.search(commit.message)
        if match is None:
            continue
        try:
            number = int(match.group(1))
        except ValueError:
            logger.warning(f"Skipping unparseable pull request number in commit {commit.sha[:8]}")
            continue
        if number <= 0:
            logger.warning(f"Skipping invalid pull request number #{number} in commit {commit.sha[:8]}")
            continue
        ids.append(number)
    return ids


def format_changelog_entry(pr: PullRequestSummary) -> str:
    return f" - {pr.title} - #{pr.number} via @{pr.author_login}"


class ChangelogBuilder:
    """Builds changelog lines for a draft release."""

    def __init__(self, client: GithubClient, owner: str, repo: str):
        self.client = client
        self.owner = owner
        self.repo = repo

    def build(self, head_tag: str) -> List[str]:
        """Return one line per pull request merged since the latest published release.

        Args:
            head_tag: Tag of the draft release

        Returns:
            Changelog lines in the order the comparison API returned the commits
        """
        baseline = self.client.get_latest_release(self.owner, self.repo)
        logger.info(f"Comparing {baseline.tag_name}...{head_tag}")

        commits = self.client.compare_commits(self.owner, self.repo, baseline.tag_name, head_tag)
        pull_request_ids = extract_pull_request_ids(commits)
        logger.debug(f"✓ Found {len(pull_request_ids)} merged pull requests in {len(commits)} commits")

        entries: List[str] = []
        for number in pull_request_ids:
            pr = self.client.get_pull_request(self.owner, self.repo, number)
            entries.append(format_changelog_entry(pr))
        return entries
