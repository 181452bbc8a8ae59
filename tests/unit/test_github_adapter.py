"""Unit tests for the GitHubKitAdapter class and related GitHub operations."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from githubkit.exception import RequestFailed

from changelog_builder.github.adapter import GitHubKitAdapter


class DummyResponse:
    """A dummy response object to mock GitHub API responses."""

    def __init__(self, parsed_data: Any = None, json_data: Any = None, status_code: int = 200) -> None:
        """Initialize the dummy response with parsed and raw data."""
        self.status_code: int = status_code
        self.parsed_data = parsed_data
        self._json_data = json_data

    def json(self) -> Any:
        """Return the raw JSON body."""
        return self._json_data


def make_adapter() -> GitHubKitAdapter:
    """Create an adapter around a mocked githubkit client."""
    return GitHubKitAdapter(MagicMock(), "owner", "repo")


def make_request_failed(status_code: int, json_data: dict[str, Any] | None = None) -> RequestFailed:
    """Create a githubkit RequestFailed error for a response with the given status."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data or {}
    return RequestFailed(response)


@pytest.mark.asyncio
async def test_list_tags_paginates_and_truncates() -> None:
    """Test that tags are paged and cut at max_count."""
    adapter = make_adapter()
    first_page = [MagicMock(name=f"tag{i}") for i in range(100)]
    second_page = [MagicMock(name=f"tag{i}") for i in range(100, 150)]
    adapter.client.rest.repos.async_list_tags = AsyncMock(side_effect=[DummyResponse(first_page), DummyResponse(second_page)])

    tags = await adapter.list_tags(120)

    assert tags == first_page + second_page[:20]
    assert adapter.client.rest.repos.async_list_tags.await_count == 2
    assert adapter.client.rest.repos.async_list_tags.await_args_list[1].kwargs["page"] == 2


@pytest.mark.asyncio
async def test_list_tags_small_max_count() -> None:
    """Test that a small max_count requests a single small page."""
    adapter = make_adapter()
    page = [MagicMock(), MagicMock()]
    adapter.client.rest.repos.async_list_tags = AsyncMock(return_value=DummyResponse(page))

    assert await adapter.list_tags(5) == page
    adapter.client.rest.repos.async_list_tags.assert_awaited_once_with(owner="owner", repo="repo", per_page=5, page=1)


@pytest.mark.asyncio
async def test_compare_commits_paginates() -> None:
    """Test that comparison pages are followed until total_commits is reached."""
    adapter = make_adapter()
    adapter.client.rest.repos.async_compare_commits = AsyncMock(
        side_effect=[
            DummyResponse(json_data={"total_commits": 3, "commits": [{"sha": "a1"}, {"sha": "a2"}]}),
            DummyResponse(json_data={"total_commits": 3, "commits": [{"sha": "a3"}]}),
        ]
    )

    commits = await adapter.compare_commits("v1.0.0", "v1.1.0", per_page=2)

    assert [c["sha"] for c in commits] == ["a1", "a2", "a3"]
    first_call = adapter.client.rest.repos.async_compare_commits.await_args_list[0]
    assert first_call.kwargs["basehead"] == "v1.0.0...v1.1.0"


@pytest.mark.asyncio
async def test_compare_commits_422_becomes_value_error() -> None:
    """Test that an unprocessable comparison is reported as ValueError with GitHub's message."""
    adapter = make_adapter()
    adapter.client.rest.repos.async_compare_commits = AsyncMock(side_effect=make_request_failed(422, {"message": "No common ancestor"}))

    with pytest.raises(ValueError, match="No common ancestor"):
        await adapter.compare_commits("main", "orphan")


@pytest.mark.asyncio
async def test_compare_commits_404_propagates() -> None:
    """Test that unknown references surface as RequestFailed."""
    adapter = make_adapter()
    adapter.client.rest.repos.async_compare_commits = AsyncMock(side_effect=make_request_failed(404))

    with pytest.raises(RequestFailed):
        await adapter.compare_commits("v0.0.0", "v1.1.0")


@pytest.mark.asyncio
async def test_get_commit_returns_raw_json() -> None:
    """Test that get_commit returns the raw commit dictionary."""
    adapter = make_adapter()
    adapter.client.rest.repos.async_get_commit = AsyncMock(return_value=DummyResponse(json_data={"sha": "abc123"}))

    assert await adapter.get_commit("abc123") == {"sha": "abc123"}
    adapter.client.rest.repos.async_get_commit.assert_awaited_once_with(owner="owner", repo="repo", ref="abc123")


@pytest.mark.asyncio
async def test_list_pull_requests_page() -> None:
    """Test that a single page of closed pull requests is requested, most recently updated first."""
    adapter = make_adapter()
    page = [MagicMock()]
    adapter.client.rest.pulls.async_list = AsyncMock(return_value=DummyResponse(page))

    assert await adapter.list_pull_requests_page(page=3) == page
    adapter.client.rest.pulls.async_list.assert_awaited_once_with(
        owner="owner", repo="repo", state="closed", sort="updated", direction="desc", per_page=100, page=3
    )
