"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any, Literal


class GitHubClientBase(ABC):
    """Read-only GitHub operations needed to build a changelog."""

    # Tags
    @abstractmethod
    async def list_tags(self, max_count: int) -> list[Any]:
        """List up to ``max_count`` tags, newest first as returned by the API."""
        pass

    # Commits
    @abstractmethod
    async def compare_commits(self, base: str, head: str) -> list[dict[str, Any]]:
        """List the commits reachable from ``head`` but not from ``base``, oldest first."""
        pass

    @abstractmethod
    async def get_commit(self, commit_sha: str) -> dict[str, Any]:
        """Get detailed information about a specific commit, including full message body."""
        pass

    # Pull Requests
    @abstractmethod
    async def list_pull_requests_page(
        self,
        page: int,
        state: Literal["open", "closed", "all"] = "closed",
        sort: Literal["created", "updated", "popularity", "long-running"] = "updated",
        direction: Literal["asc", "desc"] = "desc",
        per_page: int = 100,
    ) -> list[Any]:
        """List a single page of pull requests."""
        pass
