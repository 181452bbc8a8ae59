"""Exceptions raised while building a changelog."""


class ReleaseNotesError(Exception):
    """Base class for changelog generation errors."""

    pass


class RefResolutionError(ReleaseNotesError):
    """Raised when the commit range between two references cannot be resolved."""

    def __init__(self, from_ref: str, to_ref: str, reason: str) -> None:
        """Initializes the exception with the references that failed to resolve."""
        super().__init__(f"Failed to compare '{from_ref}...{to_ref}': {reason}")
        self.from_ref = from_ref
        self.to_ref = to_ref
        self.reason = reason


class NoCommitsFound(ReleaseNotesError):
    """Raised when a release window is requested for an empty commit range."""

    pass


class NoPullRequestsMatched(ReleaseNotesError):
    """Raised when no pull request could be matched to the release commits."""

    pass


class TagResolutionError(ReleaseNotesError):
    """Raised when the release tags to compare cannot be determined."""

    pass
