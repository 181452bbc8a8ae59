"""Release changelog generation module."""

from .exceptions import NoCommitsFound, NoPullRequestsMatched, RefResolutionError, ReleaseNotesError, TagResolutionError
from .matcher import MetadataHashMatchingStrategy, PullRequestMatcher, ShaMatchingStrategy
from .models import (
    CommitInfo,
    MergeCommitInfo,
    PullRequestInfo,
    ReleaseNotesOptions,
    ReleaseNotesResult,
    ReleaseNotesStatus,
    ReleaseWindow,
)
from .orchestrator import ReleaseNotes
from .transform import ChangelogContext, build_changelog

__all__ = [
    "CommitInfo",
    "MergeCommitInfo",
    "PullRequestInfo",
    "ReleaseWindow",
    "ReleaseNotesOptions",
    "ReleaseNotesStatus",
    "ReleaseNotesResult",
    "ReleaseNotesError",
    "RefResolutionError",
    "NoCommitsFound",
    "NoPullRequestsMatched",
    "TagResolutionError",
    "ShaMatchingStrategy",
    "MetadataHashMatchingStrategy",
    "PullRequestMatcher",
    "ChangelogContext",
    "build_changelog",
    "ReleaseNotes",
]
