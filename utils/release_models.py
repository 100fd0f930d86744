#!/usr/bin/env python3
"""Pydantic models for release, asset, commit and pull request data.

Every model is a read-only snapshot of what the GitHub REST API returned for a
single run; nothing here is persisted.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class UserInfo(BaseModel):
    """Basic user information."""

    login: str = Field(..., description="GitHub username")

    model_config = {"extra": "ignore"}


class AuthenticatedUser(BaseModel):
    """The identity behind the access token and the scopes granted to it."""

    login: str = Field(..., description="GitHub username of the token owner")
    scopes: Optional[List[str]] = Field(
        None,
        description="OAuth scopes from X-OAuth-Scopes; None when the API reports none"
    )

    model_config = {"extra": "ignore"}


class ReleaseAsset(BaseModel):
    """A binary file attached to a release."""

    name: str = Field(..., description="Asset file name")
    url: str = Field(..., description="API download URL for the asset")

    model_config = {"extra": "ignore"}


class Release(BaseModel):
    """A release record, draft or published."""

    id: int = Field(..., description="Release identifier")
    tag_name: str = Field(..., description="Tag the release points at")
    draft: bool = Field(False, description="Whether the release is still a draft")
    html_url: Optional[str] = Field(None, description="GitHub URL for the release")

    model_config = {"extra": "ignore"}


class CommitStatus(BaseModel):
    """A commit status reported by an external service."""

    context: str = Field(..., description="Status context, e.g. the CI push build")
    target_url: Optional[str] = Field(None, description="Link to the build")

    model_config = {"extra": "ignore"}


class CommitInfo(BaseModel):
    """A commit in a comparison range."""

    sha: str = Field(..., description="Commit SHA")
    message: str = Field("", description="Full commit message")

    model_config = {"extra": "ignore"}


class PullRequestSummary(BaseModel):
    """The pull request fields needed for a changelog line."""

    number: int = Field(..., description="Pull request number")
    title: str = Field(..., description="Pull request title")
    user: UserInfo = Field(..., description="Pull request author")

    model_config = {"extra": "ignore"}

    @property
    def author_login(self) -> str:
        return self.user.login


class ChecksumEntry(BaseModel):
    """A release artifact paired with the content of its checksum file."""

    file_name: str = Field(..., description="Artifact file name without the checksum suffix")
    checksum: str = Field(..., description="Trimmed checksum file content")

    model_config = {"extra": "ignore"}
