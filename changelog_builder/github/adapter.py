"""GitHub client adapter for the githubkit library."""

from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Literal, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import PullRequestSimple, Tag

from changelog_builder.configuration.models import GitHubAuthenticationType
from changelog_builder.utils.constants import DEFAULT_GITHUB_API_URL, GITHUB_MAX_PER_PAGE
from changelog_builder.utils.github import split_repository_in_configuration
from changelog_builder.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator turning GitHub 422 Unprocessable Entity errors into a logged ValueError with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code != 422:
                raise
            try:
                error_data = exc.response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("message", "Unprocessable Entity")
            errors = error_data.get("errors", [])
            url = getattr(exc.response, "url", None)
            logger.error("GitHub 422 Unprocessable Entity", function=func.__name__, message=message, errors=errors, url=url)
            raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors} | url: {url}") from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is malformed or the app installation cannot be resolved
            RuntimeError: If required parameters for the chosen auth type are missing
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info("Creating client for GitHub instance and repository", github_api_url=github_api_url, owner=owner, repo_name=repo_name)
        client = await get_github_client(
            owner=owner,
            repo_name=repo_name,
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name)

    # Tags
    @retry_on_rate_limit()
    async def list_tags(self, max_count: int) -> list[Tag]:
        """List up to ``max_count`` tags of the repository, handling pagination."""
        per_page = min(max_count, GITHUB_MAX_PER_PAGE)
        all_tags: list[Tag] = []
        page: int = 1
        while len(all_tags) < max_count:
            response: Response[list[Tag]] = await self.client.rest.repos.async_list_tags(
                owner=self.owner, repo=self.repo_name, per_page=per_page, page=page
            )
            tags: list[Tag] = response.parsed_data
            if not tags:
                break
            all_tags.extend(tags)
            if len(tags) < per_page:
                break
            page += 1
        logger.debug("Fetched tags", owner=self.owner, repo=self.repo_name, total_tags=len(all_tags[:max_count]))
        return all_tags[:max_count]

    # Commits
    @handle_github_422
    @retry_on_rate_limit()
    async def compare_commits(self, base: str, head: str, per_page: int = GITHUB_MAX_PER_PAGE) -> list[dict[str, Any]]:
        """List the commits between two references, oldest first, handling pagination.

        Returns raw commit dictionaries, as for :meth:`get_commit`.
        """
        all_commits: list[dict[str, Any]] = []
        page: int = 1
        while True:
            logger.debug(f"Fetching compare page {page}", base=base, head=head)
            response = await self.client.rest.repos.async_compare_commits(
                owner=self.owner, repo=self.repo_name, basehead=f"{base}...{head}", per_page=per_page, page=page
            )
            comparison: dict[str, Any] = response.json()
            commits: list[dict[str, Any]] = comparison.get("commits") or []
            all_commits.extend(commits)
            total_commits = comparison.get("total_commits", len(all_commits))
            if not commits or len(commits) < per_page or len(all_commits) >= total_commits:
                break
            page += 1
        logger.info("Fetched commit comparison", owner=self.owner, repo=self.repo_name, base=base, head=head, total_commits=len(all_commits))
        return all_commits

    @handle_github_422
    @retry_on_rate_limit()
    async def get_commit(self, commit_sha: str) -> dict[str, Any]:
        """Get a commit by SHA as the raw API dictionary.

        githubkit's parsed Commit model rejects the verification block GitHub
        returns for unsigned commits, so the raw JSON is used instead.
        """
        response = await self.client.rest.repos.async_get_commit(owner=self.owner, repo=self.repo_name, ref=commit_sha)
        return response.json()  # type: ignore[no-any-return]

    # Pull Requests
    @retry_on_rate_limit()
    async def list_pull_requests_page(
        self,
        page: int,
        state: Literal["open", "closed", "all"] = "closed",
        sort: Literal["created", "updated", "popularity", "long-running"] = "updated",
        direction: Literal["asc", "desc"] = "desc",
        per_page: int = GITHUB_MAX_PER_PAGE,
    ) -> list[PullRequestSimple]:
        """List a single page of pull requests.

        Callers page through results themselves so they can stop as soon as
        older pull requests can no longer qualify.
        """
        response: Response[list[PullRequestSimple]] = await self.client.rest.pulls.async_list(
            owner=self.owner,
            repo=self.repo_name,
            state=state,
            sort=sort,
            direction=direction,
            per_page=per_page,
            page=page,
        )
        return response.parsed_data
