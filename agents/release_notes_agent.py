#!/usr/bin/env python3
"""Release notes agent for the newest draft release.

This agent checks that every build artifact has been uploaded to the newest
draft release, collects the checksum files, assembles a changelog from the
pull requests merged since the previous release, and writes both into the
draft's body for a maintainer to review and publish.
"""

import logging
import sys
from typing import List, Literal, Optional

from configs.config import Config
from utils.build_status import report_build_status
from utils.changelog_builder import ChangelogBuilder
from utils.checksum_collector import collect_checksums
from utils.credentials import check_credentials
from utils.github_client import GithubClient
from utils.release_publisher import ReleasePublisher

# Set up logging
logger = logging.getLogger(__name__)

RunOutcome = Literal[
	"missing_token",
	"insufficient_scope",
	"no_releases",
	"not_draft",
	"assets_incomplete",
	"dry_run",
	"updated",
]


class ReleaseNotesAgent:
	"""Agent that fills in the newest draft release once its build has finished."""

	def __init__(
		self,
		client: Optional[GithubClient] = None,
		*,
		owner: Optional[str] = None,
		repo: Optional[str] = None,
		expected_asset_count: Optional[int] = None,
		dry_run: bool = False,
	):
		"""Initialize the release notes agent.

		Args:
			client: Optional GithubClient instance. If None, one is created from
				GITHUB_ACCESS_TOKEN when the run starts.
			owner: Repository owner (defaults to Config.RELEASE_OWNER)
			repo: Repository name (defaults to Config.RELEASE_REPO)
			expected_asset_count: Number of assets a finished build uploads
			dry_run: Log the composed notes instead of updating the release
		"""
		release_config = Config.get_release_config()
		self.client = client
		self.owner = owner or release_config["owner"]
		self.repo = repo or release_config["repo"]
		self.expected_asset_count = (
			expected_asset_count if expected_asset_count is not None else release_config["expected_asset_count"]
		)
		self.checksum_suffix = release_config["checksum_suffix"]
		self.ci_status_context = release_config["ci_status_context"]
		self.issue_url = release_config["issue_url"]
		self.product_label = release_config["product_label"]
		self.dry_run = dry_run

	def run(self) -> RunOutcome:
		"""Run every step once, returning early when a precondition is not met."""
		if self.client is None:
			token = Config.get_token()
			if token is None:
				logger.info("🔴 No GITHUB_ACCESS_TOKEN environment variable set")
				return "missing_token"
			self.client = GithubClient(token)

		ok, _login = check_credentials(self.client, Config.REQUIRED_TOKEN_SCOPE)
		if not ok:
			return "insufficient_scope"

		releases = self.client.list_releases(self.owner, self.repo, per_page=1, page=1)
		if not releases:
			logger.info(f"🔴 No releases found for {self.owner}/{self.repo}")
			return "no_releases"

		release = releases[0]
		if not release.draft:
			logger.info(f"🔴 Latest published release '{release.tag_name}' is not a draft")
			return "not_draft"

		logger.info(f"✅ Newest release '{release.tag_name}' is a draft")

		assets = self.client.list_release_assets(self.owner, self.repo, release.id)
		if len(assets) != self.expected_asset_count:
			logger.info(
				f"🔴 Draft has {len(assets)} assets, expecting {self.expected_asset_count}. "
				f"This means the build agents are probably still going..."
			)
			report_build_status(
				self.client, self.owner, self.repo, release.tag_name,
				self.ci_status_context, self.issue_url,
			)
			return "assets_incomplete"

		logger.info("✅ All agents have finished and uploaded artefacts")

		checksums = collect_checksums(self.client, assets, self.checksum_suffix)
		changelog: List[str] = ChangelogBuilder(self.client, self.owner, self.repo).build(release.tag_name)

		publisher = ReleasePublisher(self.client, product_label=self.product_label)
		if self.dry_run:
			title = publisher.release_title(release.tag_name)
			body = publisher.compose_body(changelog, checksums)
			logger.info(f"💚 Dry run, release {release.id} not updated. Title: {title}")
			logger.info(body)
			return "dry_run"

		publisher.publish(self.owner, self.repo, release, changelog, checksums)
		return "updated"

	def close(self) -> None:
		"""Close the agent and cleanup resources."""
		if self.client:
			self.client.close()


def main(argv: Optional[List[str]] = None) -> int:
	"""CLI entry point for the release notes agent."""
	import argparse

	parser = argparse.ArgumentParser(
		description="Fill the newest draft release with a changelog and artifact checksums",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  GITHUB_ACCESS_TOKEN=... python -m agents.release_notes_agent
  python -m agents.release_notes_agent --owner desktop --repo dugite-native --dry-run
		"""
	)
	parser.add_argument("--owner", required=False, help="Repository owner (user or organization)")
	parser.add_argument("--repo", required=False, help="Repository name")
	parser.add_argument("--dry-run", action="store_true", help="Print the notes instead of updating the release")
	parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

	args = parser.parse_args(argv)

	# Set up logging
	log_level = logging.DEBUG if args.verbose else logging.INFO
	logging.basicConfig(
		stream=sys.stdout,
		level=log_level,
		format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
	)

	# Suppress per-request logs from the client unless in debug mode
	if not args.verbose:
		logging.getLogger("utils.github_client").setLevel(logging.WARNING)

	agent = ReleaseNotesAgent(owner=args.owner, repo=args.repo, dry_run=args.dry_run)
	try:
		outcome = agent.run()
		logger.debug(f"Run finished: {outcome}")
	except Exception as e:
		logger.exception(f"🔴 Release notes run failed: {e}")
		return 1
	finally:
		agent.close()
	return 0


if __name__ == "__main__":
	sys.exit(main())
