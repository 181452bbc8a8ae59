"""Resolve the date window of a release from its commit range."""

from datetime import timedelta
from typing import Sequence

import structlog

from changelog_builder.utils.constants import DEFAULT_MAX_BACK_TRACK_TIME_DAYS

from .exceptions import NoCommitsFound
from .models import CommitInfo, ReleaseWindow

logger = structlog.get_logger(__name__)


def resolve_release_window(commits: Sequence[CommitInfo], max_days: int | None = None) -> ReleaseWindow:
    """Compute the release window spanned by an oldest-to-newest commit list.

    The window starts at the first commit's date and ends at the last commit's
    date. If it spans more than ``max_days`` the start is moved forward so the
    window covers at most ``max_days``; it is never widened.

    Args:
        commits: Commits of the release, oldest first.
        max_days: Maximum lookback from the newest commit. Missing or non-positive values use the default of 90 days.

    Returns:
        The resolved release window.

    Raises:
        NoCommitsFound: If ``commits`` is empty.
    """
    if not commits:
        raise NoCommitsFound("Cannot resolve a release window without commits")

    from_date = commits[0].date
    to_date = commits[-1].date
    if from_date > to_date:
        # Rewritten history can leave the oldest commit with a later committer date.
        logger.debug("Commit dates out of order, swapping window bounds", first=from_date.isoformat(), last=to_date.isoformat())
        from_date, to_date = to_date, from_date
    if max_days is None or max_days <= 0:
        max_days = DEFAULT_MAX_BACK_TRACK_TIME_DAYS

    max_from_date = to_date - timedelta(days=max_days)
    if max_from_date > from_date:
        logger.info(f"Adjusted 'from_date' to go max {max_days} days back", from_date=max_from_date.isoformat())
        return ReleaseWindow(from_date=max_from_date, to_date=to_date, clamped=True)

    return ReleaseWindow(from_date=from_date, to_date=to_date)
