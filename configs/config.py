import os
from typing import Dict, Any, Optional

from dotenv import load_dotenv

load_dotenv()


class Config:
	"""Configuration for the draft release notes agent."""

	# GitHub REST configuration
	GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip('/')
	HTTP_TIMEOUT_S = int(os.getenv("HTTP_TIMEOUT_S", "30"))
	HTTP_USER_AGENT = os.getenv("HTTP_USER_AGENT", "dugite-native")
	REQUIRED_TOKEN_SCOPE = os.getenv("REQUIRED_TOKEN_SCOPE", "public_repo")

	# Repository whose draft release is inspected
	RELEASE_OWNER = os.getenv("RELEASE_OWNER", "desktop")
	RELEASE_REPO = os.getenv("RELEASE_REPO", "dugite-native")
	ISSUE_TRACKER_URL = os.getenv("ISSUE_TRACKER_URL", "https://github.com/desktop/dugite-native")

	# Build artifacts: one archive plus one checksum file, two kinds per OS/arch target
	RELEASE_TARGET_COUNT = int(os.getenv("RELEASE_TARGET_COUNT", "4"))
	EXPECTED_ASSET_COUNT = int(os.getenv("EXPECTED_ASSET_COUNT", str(RELEASE_TARGET_COUNT * 2 * 2)))
	CHECKSUM_SUFFIX = os.getenv("CHECKSUM_SUFFIX", ".sha256")

	# Travis kicks off this build after a tag is pushed to the repository
	CI_STATUS_CONTEXT = os.getenv("CI_STATUS_CONTEXT", "continuous-integration/travis-ci/push")

	# Release publishing
	PRODUCT_LABEL = os.getenv("PRODUCT_LABEL", "Git")
	RELEASE_BODY_MAX_CHARS = int(os.getenv("RELEASE_BODY_MAX_CHARS", "125000"))

	@staticmethod
	def get_token() -> Optional[str]:
		"""Read the access token at call time so a missing token is seen on every run."""
		return os.getenv("GITHUB_ACCESS_TOKEN") or None

	@classmethod
	def get_github_config(cls) -> Dict[str, Any]:
		"""Get GitHub configuration for the REST client."""
		return {
			"base_url": cls.GITHUB_API_URL,
			"token": cls.get_token(),
			"timeout_s": cls.HTTP_TIMEOUT_S,
			"user_agent": cls.HTTP_USER_AGENT,
		}

	@classmethod
	def get_release_config(cls) -> Dict[str, Any]:
		"""Get settings that describe a complete draft release.

		Returns:
			Mapping with repository coordinates, expected asset count, checksum
			suffix, CI status context and title label.
		"""
		return {
			"owner": cls.RELEASE_OWNER,
			"repo": cls.RELEASE_REPO,
			"expected_asset_count": cls.EXPECTED_ASSET_COUNT,
			"checksum_suffix": cls.CHECKSUM_SUFFIX,
			"ci_status_context": cls.CI_STATUS_CONTEXT,
			"product_label": cls.PRODUCT_LABEL,
			"issue_url": cls.ISSUE_TRACKER_URL,
		}
