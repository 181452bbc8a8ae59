"""Pull request source: merged pull requests of a release window."""

import re
from datetime import datetime
from typing import Any, Sequence

import structlog
from githubkit.exception import RequestFailed

from changelog_builder.configuration.models import exclude_pattern_regex
from changelog_builder.github.abc import GitHubClientBase
from changelog_builder.utils.constants import GITHUB_MAX_PER_PAGE
from changelog_builder.utils.github import parse_github_timestamp

from .commits import commit_info_from_api
from .models import CommitInfo, MergeCommitInfo, PullRequestInfo

logger = structlog.get_logger(__name__)


def _login(user: Any) -> str:
    return getattr(user, "login", None) or ""


def pull_request_info_from_api(pull_request: Any, merge_commit: MergeCommitInfo | None = None) -> PullRequestInfo:
    """Convert a githubkit pull request model into a PullRequestInfo.

    Without merge commit details, the projection only carries the merge commit SHA.
    """
    merged_at = parse_github_timestamp(pull_request.merged_at)
    if merged_at is None:
        raise ValueError(f"Pull request #{pull_request.number} is not merged")

    if merge_commit is None and pull_request.merge_commit_sha:
        merge_commit = MergeCommitInfo(sha=pull_request.merge_commit_sha)

    milestone = getattr(pull_request, "milestone", None)
    return PullRequestInfo(
        number=pull_request.number,
        title=pull_request.title,
        html_url=pull_request.html_url,
        merged_at=merged_at,
        author=_login(pull_request.user),
        labels=frozenset(label.name for label in pull_request.labels or []),
        milestone=milestone.title if milestone else None,
        body=pull_request.body,
        assignees=tuple(_login(user) for user in pull_request.assignees or []),
        requested_reviewers=tuple(_login(user) for user in pull_request.requested_reviewers or []),
        merge_commit=merge_commit,
    )


def exclude_pattern_matches(pattern: str, summary: str) -> bool:
    """Check a merge-branch exclude pattern against a commit summary.

    Patterns wrapped in slashes (``/release-.*/``) are regular expressions,
    anything else must appear literally in the summary.
    """
    expression = exclude_pattern_regex(pattern)
    if expression is not None:
        return re.search(expression, summary) is not None
    return pattern in summary


class PullRequestSource:
    """Loads merged pull requests and filters release commits."""

    def __init__(self, adapter: GitHubClientBase, per_page: int = GITHUB_MAX_PER_PAGE) -> None:
        """Initialize with the GitHub adapter of the repository."""
        self.adapter = adapter
        self.per_page = per_page

    async def get_between_dates(
        self,
        owner: str,
        repo: str,
        from_date: datetime,
        to_date: datetime,
        max_count: int,
        include_merge_commit: bool = False,
    ) -> list[PullRequestInfo]:
        """Return pull requests merged within ``[from_date, to_date]``.

        Closed pull requests are paged most recently updated first. Paging stops
        once ``max_count`` pull requests were collected or a page reaches pull
        requests last updated before ``from_date``, since a pull request is
        always updated at or after its merge.

        Args:
            owner: Repository owner, used for logging.
            repo: Repository name, used for logging.
            from_date: Start of the release window.
            to_date: End of the release window.
            max_count: Maximum number of pull requests to return.
            include_merge_commit: Fetch each pull request's merge commit to fill the full projection.

        Returns:
            Matching pull requests, most recently updated first.
        """
        logger.info(f"Fetching PRs between dates {from_date.isoformat()} to {to_date.isoformat()} for {owner}/{repo}")

        collected: list[Any] = []
        page = 1
        exhausted = False
        while not exhausted and len(collected) < max_count:
            pull_requests = await self.adapter.list_pull_requests_page(page=page, per_page=self.per_page)
            for pull_request in pull_requests:
                updated_at = parse_github_timestamp(pull_request.updated_at)
                if updated_at is not None and updated_at < from_date:
                    exhausted = True
                    break
                merged_at = parse_github_timestamp(pull_request.merged_at)
                if merged_at is None or not from_date <= merged_at <= to_date:
                    continue
                collected.append(pull_request)
                if len(collected) >= max_count:
                    break
            if len(pull_requests) < self.per_page:
                exhausted = True
            page += 1

        result: list[PullRequestInfo] = []
        for pull_request in collected:
            merge_commit = await self.fetch_merge_commit(pull_request.merge_commit_sha) if include_merge_commit else None
            result.append(pull_request_info_from_api(pull_request, merge_commit))

        logger.info(f"Retrieved {len(result)} merged PRs for {owner}/{repo}")
        return result

    async def fetch_merge_commit(self, sha: str | None) -> MergeCommitInfo | None:
        """Fetch a merge commit's author, message and dates.

        Failures are logged and yield ``None``; the pull request then keeps only its merge commit SHA.
        """
        if not sha:
            return None
        try:
            commit = commit_info_from_api(await self.adapter.get_commit(sha))
        except (RequestFailed, ValueError) as exc:
            logger.warning("Failed to fetch merge commit details", sha=sha, error=str(exc), error_type=type(exc).__name__)
            return None
        return MergeCommitInfo(
            sha=commit.sha,
            summary=commit.summary,
            message=commit.message,
            author=commit.author,
            date=commit.date,
            authored_date=commit.authored_date,
        )

    def filter_commits(self, commits: Sequence[CommitInfo], exclude_patterns: Sequence[str]) -> list[CommitInfo]:
        """Drop commits whose summary names an excluded merge branch.

        Merge commits read ``Merge pull request #12 from org/branch``, so
        excluding ``org/qa`` removes merges coming from that branch.
        """
        if not exclude_patterns:
            return list(commits)
        kept = [commit for commit in commits if not any(exclude_pattern_matches(pattern, commit.summary) for pattern in exclude_patterns)]
        if len(kept) != len(commits):
            logger.info("Excluded merge branch commits", excluded=len(commits) - len(kept), patterns=list(exclude_patterns))
        return kept
