"""Resolve which two tags bound a release."""

from dataclasses import dataclass

import structlog
from packaging import version

from changelog_builder.github.abc import GitHubClientBase

from .exceptions import TagResolutionError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TagRange:
    """The references a changelog is built between."""

    from_tag: str
    to_tag: str


def parse_tag_version(tag_name: str) -> version.Version | None:
    """Parse a tag such as ``v1.2.3`` into a comparable version, or ``None`` if it is not a version."""
    try:
        return version.parse(tag_name.removeprefix("v").removeprefix("V"))
    except version.InvalidVersion:
        return None


def sort_tags(tag_names: list[str]) -> list[str]:
    """Order tags newest first.

    Version-like tags are ordered by version. Any other tag keeps its position
    relative to the API order, after the version-like tags.
    """
    versioned = [(parsed, name) for name in tag_names if (parsed := parse_tag_version(name)) is not None]
    unversioned = [name for name in tag_names if parse_tag_version(name) is None]
    versioned.sort(key=lambda item: item[0], reverse=True)
    return [name for _, name in versioned] + unversioned


class TagResolver:
    """Determines the tag range of a release from the repository's tags."""

    def __init__(self, adapter: GitHubClientBase, max_tags_to_fetch: int) -> None:
        """Initialize with the GitHub adapter and the number of tags to look at."""
        self.adapter = adapter
        self.max_tags_to_fetch = max_tags_to_fetch

    async def resolve(self, to_tag: str | None = None, from_tag: str | None = None) -> TagRange:
        """Fill in whichever end of the tag range was not given.

        Without ``to_tag`` the newest tag is used. Without ``from_tag`` the tag
        preceding ``to_tag`` is used.

        Raises:
            TagResolutionError: If the repository has no usable tags.
        """
        if to_tag and from_tag:
            return TagRange(from_tag=from_tag, to_tag=to_tag)

        tags = await self.adapter.list_tags(self.max_tags_to_fetch)
        ordered = sort_tags([tag.name for tag in tags])
        logger.info(f"Fetched {len(ordered)} tags", max_tags_to_fetch=self.max_tags_to_fetch)

        if not to_tag:
            if not ordered:
                raise TagResolutionError("No tags found and no 'to' tag given")
            to_tag = ordered[0]
            logger.info(f"Resolved 'to' tag to latest tag '{to_tag}'")

        if not from_tag:
            from_tag = self.previous_tag(ordered, to_tag)
            logger.info(f"Resolved 'from' tag to '{from_tag}'")

        return TagRange(from_tag=from_tag, to_tag=to_tag)

    @staticmethod
    def previous_tag(ordered: list[str], to_tag: str) -> str:
        """Return the tag released before ``to_tag`` from a newest-first tag list.

        A ``to_tag`` that is not a tag yet (e.g. a branch about to be tagged) is
        preceded by the newest tag.
        """
        if to_tag in ordered:
            index = ordered.index(to_tag)
            if index + 1 < len(ordered):
                return ordered[index + 1]
            raise TagResolutionError(f"No tag found before '{to_tag}'")
        if ordered:
            return ordered[0]
        raise TagResolutionError(f"No tag found before '{to_tag}'")
