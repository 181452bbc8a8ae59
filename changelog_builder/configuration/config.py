"""Reconciled configuration handed from the CLI to the changelog workflow."""

from dataclasses import dataclass
from pathlib import Path

from changelog_builder.configuration.models import Configuration, GitHubAuthenticationType


@dataclass
class BaseConfig:
    """Configuration shared by every command talking to GitHub."""

    debug: bool
    github_api_url: str
    github_authentication_type: GitHubAuthenticationType
    github_pat_token: str | None
    github_app_id: int | None
    github_app_private_key_path: Path | None
    github_app_installation_id: int | None
    repo: str


@dataclass
class BuildChangelogConfig(BaseConfig):
    """Configuration class for the build command."""

    from_tag: str | None
    to_tag: str | None
    commit_mode: bool
    fail_on_error: bool
    configuration: Configuration
