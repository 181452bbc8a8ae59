"""Content fingerprints used to match commits whose SHA changed through a rebase or squash."""

import hashlib
from datetime import datetime
from typing import Literal

from .models import CommitInfo, PullRequestInfo

DateSource = Literal["committed", "authored"]


def fingerprint(author: str, message: str, unix_seconds: int) -> str:
    """Return the SHA-256 hex digest of author, message and timestamp concatenated without separator."""
    payload = f"{author}{message}{unix_seconds}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _pick_date(date: datetime | None, authored_date: datetime | None, date_source: DateSource) -> datetime | None:
    if date_source == "authored":
        return authored_date
    return date


def commit_fingerprint(commit: CommitInfo, date_source: DateSource = "committed") -> str | None:
    """Fingerprint a commit of the release range.

    Returns ``None`` when the selected timestamp is unknown.
    """
    date = _pick_date(commit.date, commit.authored_date, date_source)
    if date is None:
        return None
    return fingerprint(commit.author or "", commit.message, int(date.timestamp()))


def merge_commit_fingerprint(pull_request: PullRequestInfo, date_source: DateSource = "committed") -> str | None:
    """Fingerprint the merge commit of a pull request.

    Returns ``None`` for pull requests without a merge commit, or whose merge
    commit lacks the message or the selected timestamp. Such pull requests can
    never match by fingerprint.
    """
    merge_commit = pull_request.merge_commit
    if merge_commit is None or merge_commit.message is None:
        return None
    date = _pick_date(merge_commit.date, merge_commit.authored_date, date_source)
    if date is None:
        return None
    return fingerprint(merge_commit.author or "", merge_commit.message, int(date.timestamp()))
