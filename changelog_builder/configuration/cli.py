"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from changelog_builder.configuration.driver import get_build_changelog_config
from changelog_builder.configuration.exceptions import (
    ConfigurationLoadError,
    GitHubAuthenticationConfigurationUndefinedError,
    RequiredConfigurationElementError,
)
from changelog_builder.release_notes.driver import run_build_changelog_workflow
from changelog_builder.release_notes.models import ReleaseNotesStatus
from changelog_builder.utils.constants import DEFAULT_GITHUB_API_URL
from changelog_builder.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Build categorized changelogs from the pull requests merged between two tags.")


@typer_app.callback()
def main() -> None:
    """Build categorized changelogs from the pull requests merged between two tags."""


@typer_app.command(name="build")
def build_cli(
    repo: Annotated[str | None, Argument(envvar="REPO", help="Repository name (owner/repo).")] = None,
    from_tag: Annotated[str | None, Option("--from-tag", envvar="FROM_TAG", help="Tag or reference the release starts after. Defaults to the tag preceding --to-tag.")] = None,
    to_tag: Annotated[str | None, Option("--to-tag", envvar="TO_TAG", help="Tag or reference the release ends at. Defaults to the latest tag.")] = None,
    configuration: Annotated[Path | None, Option("--configuration", envvar="CONFIGURATION", help="Path to a JSON or YAML configuration file.")] = None,
    configuration_json: Annotated[str | None, Option("--configuration-json", envvar="CONFIGURATION_JSON", help="Inline JSON configuration, takes precedence over --configuration.")] = None,
    commit_mode: Annotated[bool, Option("--commit-mode", envvar="COMMIT_MODE", help="List every commit instead of matching pull requests.")] = False,
    fail_on_error: Annotated[bool, Option("--fail-on-error", envvar="FAIL_ON_ERROR", help="Fail when the tags cannot be compared.")] = False,
    output: Annotated[Path | None, Option("--output", envvar="OUTPUT", help="Write the changelog to this file instead of stdout.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = DEFAULT_GITHUB_API_URL,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
) -> None:
    """Builds the changelog of a release."""
    configure_logging(debug)

    try:
        config = get_build_changelog_config(
            debug=debug,
            github_api_url=github_api_url,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            repo=repo,
            from_tag=from_tag,
            to_tag=to_tag,
            configuration_path=configuration,
            configuration_json=configuration_json,
            commit_mode=commit_mode,
            fail_on_error=fail_on_error,
        )
    except (ConfigurationLoadError, GitHubAuthenticationConfigurationUndefinedError, RequiredConfigurationElementError) as e:
        typer.echo(f"Invalid configuration: {str(e)}", err=True)
        sys.exit(1)

    if config.debug and not debug:
        configure_logging(config.debug)

    result = asyncio.run(run_build_changelog_workflow(config))
    if result.status == ReleaseNotesStatus.ERROR:
        typer.echo(f"Error encountered while building changelog: {result.error}", err=True)
        sys.exit(1)

    if result.status == ReleaseNotesStatus.EMPTY:
        typer.echo(f"No pull requests found between {result.from_tag} and {result.to_tag}", err=True)

    changelog = result.changelog or ""
    if output is None:
        typer.echo(changelog)
    else:
        output.write_text(changelog + "\n", encoding="utf-8")
        typer.echo(f"Changelog for {result.from_tag}...{result.to_tag} written to {output}", err=True)


if __name__ == "__main__":
    typer_app()
