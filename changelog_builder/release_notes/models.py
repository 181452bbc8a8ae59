"""Data models for changelog generation."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from changelog_builder.configuration.models import Configuration


class CommitInfo(BaseModel):
    """A single commit of a release's commit range.

    ``date`` is the committer date. ``authored_date`` is kept alongside so the
    fingerprint can be computed from either timestamp.
    """

    model_config = ConfigDict(frozen=True)

    sha: str
    summary: str
    message: str
    author: str | None = None
    date: datetime
    authored_date: datetime | None = None


class MergeCommitInfo(BaseModel):
    """The commit created when a pull request was merged."""

    model_config = ConfigDict(frozen=True)

    sha: str
    summary: str | None = None
    message: str | None = None
    author: str | None = None
    date: datetime | None = None
    authored_date: datetime | None = None


class PullRequestInfo(BaseModel):
    """A merged pull request, or a commit standing in for one in commit mode.

    Synthesized entries have ``number == 0`` and no merge commit.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    html_url: str = ""
    merged_at: datetime
    author: str = ""
    labels: frozenset[str] = frozenset()
    milestone: str | None = None
    body: str | None = None
    assignees: tuple[str, ...] = ()
    requested_reviewers: tuple[str, ...] = ()
    merge_commit: MergeCommitInfo | None = None

    @property
    def merge_commit_sha(self) -> str | None:
        """SHA of the merge commit, if the pull request has one."""
        return self.merge_commit.sha if self.merge_commit else None

    @property
    def is_synthesized(self) -> bool:
        """Whether this entry was built from a raw commit in commit mode."""
        return self.number == 0 and self.merge_commit is None


@dataclass(frozen=True)
class ReleaseWindow:
    """Date range bounding the pull requests considered part of a release."""

    from_date: datetime
    to_date: datetime
    clamped: bool = False


@dataclass(frozen=True)
class ReleaseNotesOptions:
    """Options for a single changelog invocation."""

    owner: str
    repo: str
    from_tag: str
    to_tag: str
    fail_on_error: bool = False
    commit_mode: bool = False
    configuration: Configuration = field(default_factory=Configuration)


class ReleaseNotesStatus(str, Enum):
    """Outcome of a changelog run."""

    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


class ReleaseNotesResult(BaseModel):
    """Result of a changelog run as reported by the CLI workflow."""

    status: ReleaseNotesStatus
    from_tag: str | None = None
    to_tag: str | None = None
    changelog: str | None = None
    error: str | None = None
