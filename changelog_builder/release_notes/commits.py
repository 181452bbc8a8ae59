"""Commit history source: the commits between two references."""

from typing import Any

import structlog
from githubkit.exception import RequestFailed

from changelog_builder.github.abc import GitHubClientBase
from changelog_builder.utils.github import parse_github_timestamp

from .exceptions import RefResolutionError
from .models import CommitInfo

logger = structlog.get_logger(__name__)


def commit_info_from_api(raw_commit: dict[str, Any]) -> CommitInfo:
    """Convert a raw GitHub commit dictionary into a CommitInfo.

    The commit date is the committer date, falling back to the author date.
    """
    commit = raw_commit.get("commit") or {}
    git_author = commit.get("author") or {}
    git_committer = commit.get("committer") or {}
    message: str = commit.get("message") or ""

    authored_date = parse_github_timestamp(git_author.get("date"))
    committed_date = parse_github_timestamp(git_committer.get("date")) or authored_date
    if committed_date is None:
        raise ValueError(f"Commit {raw_commit.get('sha')} has neither a committer nor an author date")

    return CommitInfo(
        sha=raw_commit["sha"],
        summary=message.split("\n", 1)[0],
        message=message,
        author=git_author.get("name"),
        date=committed_date,
        authored_date=authored_date,
    )


class CommitHistorySource:
    """Loads the commits of a release from the GitHub compare API."""

    def __init__(self, adapter: GitHubClientBase) -> None:
        """Initialize with the GitHub adapter of the repository."""
        self.adapter = adapter

    async def diff(self, owner: str, repo: str, from_ref: str, to_ref: str) -> list[CommitInfo]:
        """Return the commits between two references, oldest first.

        Args:
            owner: Repository owner, used for logging.
            repo: Repository name, used for logging.
            from_ref: The reference (tag, branch, SHA) the release starts after.
            to_ref: The reference the release ends at.

        Returns:
            Commits reachable from ``to_ref`` but not from ``from_ref``.

        Raises:
            RefResolutionError: If GitHub cannot compare the two references.
        """
        logger.info(f"Comparing {owner}/{repo} - '{from_ref}...{to_ref}'")
        try:
            raw_commits = await self.adapter.compare_commits(from_ref, to_ref)
        except RequestFailed as exc:
            if exc.response.status_code != 404:
                raise
            raise RefResolutionError(from_ref, to_ref, "reference not found") from exc
        except ValueError as exc:
            raise RefResolutionError(from_ref, to_ref, str(exc)) from exc
        return [commit_info_from_api(raw_commit) for raw_commit in raw_commits]
