"""Match merged pull requests to the commits of a release."""

from typing import Protocol, Sequence

import structlog

from changelog_builder.configuration.models import Configuration

from .fingerprint import DateSource, commit_fingerprint, merge_commit_fingerprint
from .models import CommitInfo, PullRequestInfo

logger = structlog.get_logger(__name__)


class MatchingStrategy(Protocol):
    """Derives the keys used to pair a pull request with a release commit."""

    def key_for_commit(self, commit: CommitInfo) -> str | None:
        """Return the matching key of a release commit, or ``None`` if it has none."""
        ...

    def key_for_pull_request(self, pull_request: PullRequestInfo) -> str | None:
        """Return the matching key of a pull request's merge commit, or ``None`` if it has none."""
        ...


class ShaMatchingStrategy:
    """Match on commit identity: the merge commit SHA must be part of the release."""

    def key_for_commit(self, commit: CommitInfo) -> str | None:
        """Use the commit SHA."""
        return commit.sha

    def key_for_pull_request(self, pull_request: PullRequestInfo) -> str | None:
        """Use the pull request's merge commit SHA."""
        return pull_request.merge_commit_sha or None


class MetadataHashMatchingStrategy:
    """Match on commit content (author, message, timestamp), tolerating rebased or squashed history."""

    def __init__(self, date_source: DateSource = "committed") -> None:
        """Initialize with the timestamp used for fingerprints."""
        self.date_source: DateSource = date_source

    def key_for_commit(self, commit: CommitInfo) -> str | None:
        """Use the commit's content fingerprint."""
        key = commit_fingerprint(commit, self.date_source)
        logger.debug("Fingerprinted release commit", sha=commit.sha, summary=commit.summary, fingerprint=key)
        return key

    def key_for_pull_request(self, pull_request: PullRequestInfo) -> str | None:
        """Use the content fingerprint of the pull request's merge commit."""
        key = merge_commit_fingerprint(pull_request, self.date_source)
        logger.debug(
            "Fingerprinted pull request merge commit",
            number=pull_request.number,
            merge_commit_sha=pull_request.merge_commit_sha,
            fingerprint=key,
        )
        return key


def strategy_for(configuration: Configuration) -> MatchingStrategy:
    """Select the matching strategy for a run."""
    if configuration.use_metadata_hash:
        logger.info("Metadata hash matching is enabled", date_source=configuration.metadata_hash_date)
        return MetadataHashMatchingStrategy(configuration.metadata_hash_date)
    return ShaMatchingStrategy()


class PullRequestMatcher:
    """Keeps exactly the pull requests whose merge corresponds to a release commit."""

    def __init__(self, strategy: MatchingStrategy) -> None:
        """Initialize with the strategy producing matching keys."""
        self.strategy = strategy

    def release_keys(self, commits: Sequence[CommitInfo]) -> set[str]:
        """Collect the matching keys of all release commits."""
        keys = (self.strategy.key_for_commit(commit) for commit in commits)
        return {key for key in keys if key is not None}

    def match(self, commits: Sequence[CommitInfo], pull_requests: Sequence[PullRequestInfo]) -> list[PullRequestInfo]:
        """Return the pull requests matching a release commit, in their original order.

        Duplicated keys are not collapsed: two candidates sharing a key both match.

        Args:
            commits: Release commits, already stripped of excluded merge branches.
            pull_requests: Candidate pull requests merged within the release window.

        Returns:
            The matched pull requests.
        """
        if not commits:
            return []

        keys = self.release_keys(commits)
        matched = [pr for pr in pull_requests if (key := self.strategy.key_for_pull_request(pr)) is not None and key in keys]

        logger.info(
            "Matched pull requests to release commits",
            strategy=type(self.strategy).__name__,
            release_commits=len(commits),
            candidates=len(pull_requests),
            matched=len(matched),
        )
        return matched
