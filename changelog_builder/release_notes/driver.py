"""Orchestrates a changelog build for the CLI."""

import time

import structlog

from changelog_builder.configuration.config import BuildChangelogConfig
from changelog_builder.github.adapter import GitHubKitAdapter

from .commits import CommitHistorySource
from .exceptions import ReleaseNotesError
from .models import ReleaseNotesOptions, ReleaseNotesResult, ReleaseNotesStatus
from .orchestrator import ReleaseNotes
from .pull_requests import PullRequestSource
from .tags import TagResolver
from .transform import ChangelogContext, build_changelog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_build_changelog_workflow(config: BuildChangelogConfig) -> ReleaseNotesResult:
    """Run the build workflow: resolve the tag range, collect the release entries and render them.

    A release without entries is rendered with the empty template and reported
    as ``EMPTY``. Tag resolution failures, and comparison failures when
    ``fail_on_error`` is set, are reported as ``ERROR``. GitHub API errors
    propagate.
    """
    github_adapter = await GitHubKitAdapter.create(
        repo=config.repo,
        github_auth_type=config.github_authentication_type,
        github_pat_token=config.github_pat_token,
        github_app_id=config.github_app_id,
        github_app_private_key_path=config.github_app_private_key_path,
        github_app_installation_id=config.github_app_installation_id,
        github_api_url=config.github_api_url,
    )
    configuration = config.configuration

    start_time = time.time()
    try:
        tag_range = await TagResolver(github_adapter, configuration.max_tags_to_fetch).resolve(to_tag=config.to_tag, from_tag=config.from_tag)
        options = ReleaseNotesOptions(
            owner=github_adapter.owner,
            repo=github_adapter.repo_name,
            from_tag=tag_range.from_tag,
            to_tag=tag_range.to_tag,
            fail_on_error=config.fail_on_error,
            commit_mode=config.commit_mode,
            configuration=configuration,
        )
        release_notes = ReleaseNotes(CommitHistorySource(github_adapter), PullRequestSource(github_adapter), options)
        changelog = await release_notes.pull()
    except ReleaseNotesError as exc:
        logger.error("Failed to build changelog", repo=config.repo, error=str(exc), error_type=type(exc).__name__)
        return ReleaseNotesResult(status=ReleaseNotesStatus.ERROR, from_tag=config.from_tag, to_tag=config.to_tag, error=str(exc))

    status = ReleaseNotesStatus.SUCCESS
    if changelog is None:
        status = ReleaseNotesStatus.EMPTY
        context = ChangelogContext(owner=options.owner, repo=options.repo, from_tag=options.from_tag, to_tag=options.to_tag)
        changelog = build_changelog([], configuration, context)

    logger.info(
        "Built changelog for release",
        repo=config.repo,
        from_tag=options.from_tag,
        to_tag=options.to_tag,
        status=status.value,
        duration=round(time.time() - start_time, 2),
    )
    return ReleaseNotesResult(status=status, from_tag=options.from_tag, to_tag=options.to_tag, changelog=changelog)
