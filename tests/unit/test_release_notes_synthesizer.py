"""Unit tests for commit mode synthesis."""

from datetime import datetime, timedelta, timezone

from changelog_builder.release_notes.models import CommitInfo
from changelog_builder.release_notes.synthesizer import synthesize_pull_requests

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_one_entry_per_commit() -> None:
    """Test that every commit becomes exactly one entry with its fields mapped across."""
    commits = [
        CommitInfo(sha=f"c{i}", summary=f"Change {i}", message=f"Change {i}\n\nBody {i}", author=f"dev{i}", date=BASE_DATE + timedelta(days=i))
        for i in range(3)
    ]

    pull_requests = synthesize_pull_requests(commits)

    assert len(pull_requests) == len(commits)
    for commit, pull_request in zip(commits, pull_requests, strict=True):
        assert pull_request.number == 0
        assert pull_request.title == commit.summary
        assert pull_request.body == commit.message
        assert pull_request.author == commit.author
        assert pull_request.merged_at == commit.date
        assert pull_request.merge_commit is None
        assert pull_request.merge_commit_sha is None
        assert pull_request.labels == frozenset()
        assert pull_request.html_url == ""
        assert pull_request.is_synthesized


def test_missing_author_becomes_empty_string() -> None:
    """Test that a commit without author gets an empty author."""
    commit = CommitInfo(sha="c1", summary="Change", message="Change", author=None, date=BASE_DATE)
    assert synthesize_pull_requests([commit])[0].author == ""


def test_no_commits() -> None:
    """Test that no commits give no entries."""
    assert synthesize_pull_requests([]) == []
