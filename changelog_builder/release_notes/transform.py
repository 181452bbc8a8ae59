"""Render matched pull requests into a categorized changelog."""

import re
from dataclasses import dataclass
from typing import Mapping, Sequence

import structlog

from changelog_builder.configuration.models import Category, Configuration, SortOrder, Transformer
from changelog_builder.utils.templates import construct_jinja2_template_from_string, render_template

from .models import PullRequestInfo

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ChangelogContext:
    """Values of the global template placeholders describing the release."""

    owner: str = ""
    repo: str = ""
    from_tag: str = ""
    to_tag: str = ""


def fill_template(template: str, values: Mapping[str, str]) -> str:
    """Replace every ``${{NAME}}`` placeholder of ``template`` with its value.

    The template is rendered in a single pass: placeholder text inside a value
    stays as it is. Placeholders without a value are left untouched.
    """
    return render_template(construct_jinja2_template_from_string(template), values)


def pull_request_placeholders(pull_request: PullRequestInfo) -> dict[str, str]:
    """Placeholder values available to ``pr_template``."""
    return {
        "TITLE": pull_request.title,
        "NUMBER": str(pull_request.number),
        "URL": pull_request.html_url,
        "MERGED_AT": pull_request.merged_at.isoformat(),
        "AUTHOR": pull_request.author,
        "LABELS": ", ".join(sorted(pull_request.labels)),
        "MILESTONE": pull_request.milestone or "",
        "BODY": pull_request.body or "",
        "ASSIGNEES": ", ".join(pull_request.assignees),
        "REVIEWERS": ", ".join(pull_request.requested_reviewers),
    }


def apply_transformers(text: str, transformers: Sequence[Transformer]) -> str:
    """Apply the configured rewrites to a rendered entry, in order."""
    for transformer in transformers:
        if transformer.regex:
            try:
                text = re.sub(transformer.pattern, transformer.target, text)
            except re.error as exc:
                logger.warning("Skipping transformer with invalid pattern", pattern=transformer.pattern, error=str(exc))
        else:
            text = text.replace(transformer.pattern, transformer.target)
    return text


def classify(pull_request: PullRequestInfo, categories: Sequence[Category]) -> Category | None:
    """Return the first category sharing a label with the pull request, or ``None``."""
    for category in categories:
        if pull_request.labels.intersection(category.labels):
            return category
    return None


def sort_pull_requests(pull_requests: Sequence[PullRequestInfo], order: SortOrder) -> list[PullRequestInfo]:
    """Order pull requests by merge date. The sort is stable, so ties keep their input order."""
    return sorted(pull_requests, key=lambda pr: pr.merged_at, reverse=order == SortOrder.DESC)


def build_changelog(pull_requests: Sequence[PullRequestInfo], configuration: Configuration, context: ChangelogContext | None = None) -> str:
    """Render the changelog document.

    Each pull request is rendered with ``pr_template`` and rewritten by the
    transformers, then placed in the first category whose labels it carries.
    Non-empty categories become sections (title line followed by one entry
    per line), separated by a blank line, and fill ``${{CHANGELOG}}`` in the
    global template. Entries matching no category fill ``${{UNCATEGORIZED}}``.
    When no entry was categorized, ``${{CHANGELOG}}`` gets ``empty_template``.

    Args:
        pull_requests: Pull requests to list.
        configuration: The run configuration.
        context: Release details for the global template placeholders.

    Returns:
        The rendered changelog.
    """
    context = context or ChangelogContext()
    pr_template = construct_jinja2_template_from_string(configuration.pr_template)

    sections: dict[str, list[str]] = {category.title: [] for category in configuration.categories}
    uncategorized: list[str] = []
    for pull_request in sort_pull_requests(pull_requests, configuration.sort):
        entry = apply_transformers(render_template(pr_template, pull_request_placeholders(pull_request)), configuration.transformers)
        category = classify(pull_request, configuration.categories)
        if category is None:
            uncategorized.append(entry)
        else:
            sections[category.title].append(entry)

    rendered_sections = [f"{title}\n" + "\n".join(entries) for title, entries in sections.items() if entries]
    changelog = "\n\n".join(rendered_sections) if rendered_sections else configuration.empty_template

    logger.info(
        "Built changelog",
        pull_requests=len(pull_requests),
        categorized=len(pull_requests) - len(uncategorized),
        uncategorized=len(uncategorized),
    )

    return fill_template(
        configuration.template,
        {
            "CHANGELOG": changelog,
            "UNCATEGORIZED": "\n".join(uncategorized),
            "OWNER": context.owner,
            "REPO": context.repo,
            "FROM_TAG": context.from_tag,
            "TO_TAG": context.to_tag,
        },
    )
