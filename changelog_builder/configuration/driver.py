"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio
from pathlib import Path

from changelog_builder.configuration import reconcile
from changelog_builder.configuration.config import BuildChangelogConfig
from changelog_builder.utils.constants import DEFAULT_GITHUB_API_URL


def get_build_changelog_config(
    debug: bool = False,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
    github_pat_token: str | None = None,
    github_app_id: int | None = None,
    github_app_private_key_path: Path | None = None,
    github_app_installation_id: int | None = None,
    repo: str | None = None,
    from_tag: str | None = None,
    to_tag: str | None = None,
    configuration_path: Path | None = None,
    configuration_json: str | None = None,
    commit_mode: bool = False,
    fail_on_error: bool = False,
) -> BuildChangelogConfig:
    """Synchronously get the reconciled build configuration."""
    return asyncio.run(
        reconcile.reconcile_build_changelog_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_pat_token=github_pat_token,
            cli_github_app_id=github_app_id,
            cli_github_app_private_key_path=github_app_private_key_path,
            cli_github_app_installation_id=github_app_installation_id,
            cli_repo=repo,
            cli_from_tag=from_tag,
            cli_to_tag=to_tag,
            cli_configuration_path=configuration_path,
            cli_configuration_json=configuration_json,
            cli_commit_mode=commit_mode,
            cli_fail_on_error=fail_on_error,
        )
    )
