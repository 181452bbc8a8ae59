"""Commit mode: turn raw commits into changelog entries without pull request matching."""

from typing import Sequence

from .models import CommitInfo, PullRequestInfo


def synthesize_pull_request(commit: CommitInfo) -> PullRequestInfo:
    """Build the stand-in pull request for a single commit."""
    return PullRequestInfo(
        number=0,
        title=commit.summary,
        merged_at=commit.date,
        author=commit.author or "",
        body=commit.message or "",
    )


def synthesize_pull_requests(commits: Sequence[CommitInfo]) -> list[PullRequestInfo]:
    """Build one stand-in pull request per commit, preserving commit order."""
    return [synthesize_pull_request(commit) for commit in commits]
