"""Contains utility functions for GitHub interactions."""

from datetime import datetime


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into its owner and repository name."""
    if repo is None:
        raise ValueError("A repository in the format 'owner/repo' is required.")
    parts = repo.strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def parse_github_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO 8601 timestamp as returned by the GitHub REST API.

    Naive values are left untouched; GitHub always sends a ``Z`` or offset suffix.
    """
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
