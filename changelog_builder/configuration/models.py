"""Models for the run configuration and GitHub authentication."""

import re
from enum import Enum
from typing import Literal

import jinja2
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from changelog_builder.utils.constants import (
    DEFAULT_EMPTY_TEMPLATE,
    DEFAULT_MAX_BACK_TRACK_TIME_DAYS,
    DEFAULT_MAX_PULL_REQUESTS,
    DEFAULT_MAX_TAGS_TO_FETCH,
    DEFAULT_PR_TEMPLATE,
    DEFAULT_TEMPLATE,
)
from changelog_builder.utils.templates import construct_jinja2_template_from_string


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


class SortOrder(str, Enum):
    """Order in which pull requests are listed within a category."""

    ASC = "ASC"
    DESC = "DESC"


class Category(BaseModel):
    """A changelog section and the labels that place a pull request in it."""

    model_config = ConfigDict(frozen=True)

    title: str
    labels: tuple[str, ...] = ()


class Transformer(BaseModel):
    """A text rewrite applied to every rendered pull request line.

    The pattern is replaced literally unless ``regex`` is set, in which case it
    is treated as a Python regular expression and ``target`` may use group
    references such as ``\\1``.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    target: str = ""
    regex: bool = False


def exclude_pattern_regex(pattern: str) -> str | None:
    """Return the expression of a ``/regex/`` exclude pattern, or ``None`` for a literal one."""
    if len(pattern) > 2 and pattern.startswith("/") and pattern.endswith("/"):
        return pattern[1:-1]
    return None


def default_categories() -> tuple[Category, ...]:
    """Return the categories used when the configuration does not define any."""
    return (
        Category(title="## 🚀 Features", labels=("feature",)),
        Category(title="## 🐛 Fixes", labels=("fix",)),
        Category(title="## 🧪 Tests", labels=("test",)),
    )


class Configuration(BaseModel):
    """Run configuration, loaded once per invocation and never mutated."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    max_tags_to_fetch: int = DEFAULT_MAX_TAGS_TO_FETCH
    max_pull_requests: int = DEFAULT_MAX_PULL_REQUESTS
    max_back_track_time_days: int = DEFAULT_MAX_BACK_TRACK_TIME_DAYS
    exclude_merge_branches: tuple[str, ...] = ()
    sort: SortOrder = SortOrder.ASC
    template: str = DEFAULT_TEMPLATE
    pr_template: str = DEFAULT_PR_TEMPLATE
    empty_template: str = DEFAULT_EMPTY_TEMPLATE
    categories: tuple[Category, ...] = Field(default_factory=default_categories)
    transformers: tuple[Transformer, ...] = ()
    use_metadata_hash: bool = False
    metadata_hash_date: Literal["committed", "authored"] = "committed"

    @field_validator("max_tags_to_fetch", "max_pull_requests", "max_back_track_time_days", mode="before")
    @classmethod
    def fall_back_to_default_bound(cls, value: int | None, info: ValidationInfo) -> int:
        """Treat absent or non-positive bounds the same as an unset value."""
        if value is None or (isinstance(value, int) and value <= 0):
            return cls.model_fields[info.field_name].default  # type: ignore[no-any-return]
        return value

    @field_validator("sort", mode="before")
    @classmethod
    def normalize_sort(cls, value: str | SortOrder) -> str | SortOrder:
        """Accept the sort order in any letter case."""
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("exclude_merge_branches")
    @classmethod
    def compile_exclude_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Reject ``/regex/`` exclude patterns that do not compile."""
        for pattern in value:
            expression = exclude_pattern_regex(pattern)
            if expression is None:
                continue
            try:
                re.compile(expression)
            except re.error as exc:
                raise ValueError(f"Invalid exclude pattern {pattern!r}: {exc}") from exc
        return value

    @field_validator("template", "pr_template")
    @classmethod
    def compile_template(cls, value: str) -> str:
        """Reject templates with malformed placeholders."""
        try:
            construct_jinja2_template_from_string(value)
        except jinja2.TemplateSyntaxError as exc:
            raise ValueError(f"Invalid template: {exc}") from exc
        return value
