"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path

import structlog

from changelog_builder.configuration.config import BuildChangelogConfig
from changelog_builder.configuration.env import settings
from changelog_builder.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    RequiredConfigurationElementError,
)
from changelog_builder.configuration.loader import load_configuration
from changelog_builder.configuration.models import GitHubAuthenticationType

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

GITHUB_APP_SETTINGS = (
    ("GitHub App ID", "github_app_id", "GITHUB_APP_ID"),
    ("GitHub App private key path", "github_app_private_key_path", "GITHUB_APP_PRIVATE_KEY_PATH"),
    ("GitHub App installation ID", "github_app_installation_id", "GITHUB_APP_INSTALLATION_ID"),
)


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If no configuration is
            defined, both are defined, or the GitHub App configuration is incomplete.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    app_values = (github_app_id, github_app_private_key_path, github_app_installation_id)

    if github_pat_token and any(app_values):
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if all(app_values):
        return GitHubAuthenticationType.APP

    if any(app_values):
        missing = [
            f"{name} (command line option {cli_name}, environment variable {env_name})"
            for (name, cli_name, env_name), value in zip(GITHUB_APP_SETTINGS, app_values, strict=True)
            if not value
        ]
        raise GitHubAuthenticationConfigurationUndefinedError("Incomplete GitHub App configuration - missing settings include " + ", ".join(missing))

    raise GitHubAuthenticationConfigurationUndefinedError(
        "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
    )


async def reconcile_build_changelog_configuration(
    cli_debug: bool,
    cli_github_api_url: str | None,
    cli_github_pat_token: str | None,
    cli_github_app_id: int | None,
    cli_github_app_private_key_path: Path | None,
    cli_github_app_installation_id: int | None,
    cli_repo: str | None,
    cli_from_tag: str | None,
    cli_to_tag: str | None,
    cli_configuration_path: Path | None,
    cli_configuration_json: str | None,
    cli_commit_mode: bool,
    cli_fail_on_error: bool,
) -> BuildChangelogConfig:
    """Reconcile the build command's CLI arguments with environment variables.

    CLI arguments win over environment variables. Authentication is validated
    and the run configuration is loaded as part of reconciliation.

    Raises:
        RequiredConfigurationElementError: If no repository is configured.
        GitHubAuthenticationConfigurationUndefinedError: If authentication is misconfigured.
        ConfigurationLoadError: If the run configuration cannot be loaded.
    """
    repo = cli_repo or settings.REPO
    if not repo:
        raise RequiredConfigurationElementError(name="repository", cli_name="repo", env_name="REPO")

    github_pat_token = cli_github_pat_token or settings.GITHUB_PAT_TOKEN
    github_app_id = cli_github_app_id or settings.GITHUB_APP_ID
    github_app_private_key_path = cli_github_app_private_key_path or settings.GITHUB_APP_PRIVATE_KEY_PATH
    github_app_installation_id = cli_github_app_installation_id or settings.GITHUB_APP_INSTALLATION_ID

    github_authentication_type = await validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )

    configuration = load_configuration(
        path=cli_configuration_path or settings.CONFIGURATION,
        raw_json=cli_configuration_json or settings.CONFIGURATION_JSON,
    )

    return BuildChangelogConfig(
        debug=cli_debug or settings.DEBUG,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_authentication_type=github_authentication_type,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        repo=repo,
        from_tag=cli_from_tag,
        to_tag=cli_to_tag,
        commit_mode=cli_commit_mode,
        fail_on_error=cli_fail_on_error,
        configuration=configuration,
    )
