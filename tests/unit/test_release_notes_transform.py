"""Unit tests for changelog rendering."""

from datetime import datetime, timedelta, timezone

import pytest

from changelog_builder.configuration.models import Category, Configuration, SortOrder, Transformer
from changelog_builder.release_notes.models import PullRequestInfo
from changelog_builder.release_notes.transform import (
    ChangelogContext,
    apply_transformers,
    build_changelog,
    classify,
    fill_template,
)

BASE_DATE = datetime(2024, 4, 1, tzinfo=timezone.utc)


def make_pull_request(number: int, title: str, labels: tuple[str, ...] = (), day: int = 0, **kwargs: object) -> PullRequestInfo:
    """Create a merged pull request."""
    return PullRequestInfo(
        number=number,
        title=title,
        html_url=f"https://github.com/octo/repo/pull/{number}",
        merged_at=BASE_DATE + timedelta(days=day),
        author="octocat",
        labels=frozenset(labels),
        **kwargs,  # type: ignore[arg-type]
    )


def test_single_feature_with_defaults() -> None:
    """Test the default templates and categories render a single feature."""
    changelog = build_changelog([make_pull_request(42, "Add X", ("feature",))], Configuration())
    assert changelog == "## 🚀 Features\n- Add X\n   - PR: #42"


def test_sections_follow_category_order() -> None:
    """Test that sections appear in configured category order, separated by a blank line."""
    pull_requests = [
        make_pull_request(2, "Fix Y", ("fix",), day=1),
        make_pull_request(1, "Add X", ("feature",), day=2),
        make_pull_request(3, "Test Z", ("test",), day=3),
    ]
    configuration = Configuration(pr_template="- ${{TITLE}}")

    assert build_changelog(pull_requests, configuration) == "## 🚀 Features\n- Add X\n\n## 🐛 Fixes\n- Fix Y\n\n## 🧪 Tests\n- Test Z"


def test_first_matching_category_wins() -> None:
    """Test that a pull request carrying labels of several categories lands in the first one."""
    pull_request = make_pull_request(1, "Both", ("fix", "feature"))
    assert classify(pull_request, Configuration().categories) == Category(title="## 🚀 Features", labels=("feature",))


def test_uncategorized_entries() -> None:
    """Test that unlabelled pull requests only appear through the UNCATEGORIZED placeholder."""
    configuration = Configuration(template="${{CHANGELOG}}\n\n## Other\n${{UNCATEGORIZED}}", pr_template="- ${{TITLE}}")
    pull_requests = [make_pull_request(1, "Add X", ("feature",)), make_pull_request(2, "Chore", ("chore",), day=1)]

    assert build_changelog(pull_requests, configuration) == "## 🚀 Features\n- Add X\n\n## Other\n- Chore"


def test_empty_template_when_nothing_categorized() -> None:
    """Test that the empty template fills the changelog when no entry has a category."""
    configuration = Configuration(template="# Release\n${{CHANGELOG}}", empty_template="- nothing here")
    assert build_changelog([make_pull_request(1, "Chore", ("chore",))], configuration) == "# Release\n- nothing here"
    assert build_changelog([], configuration) == "# Release\n- nothing here"


@pytest.mark.parametrize(
    "sort,expected",
    [
        pytest.param(SortOrder.ASC, "## 🚀 Features\n- Old\n- New", id="ascending"),
        pytest.param(SortOrder.DESC, "## 🚀 Features\n- New\n- Old", id="descending"),
    ],
)
def test_sort_by_merge_date(sort: SortOrder, expected: str) -> None:
    """Test that entries are ordered by merge date within a section."""
    pull_requests = [make_pull_request(2, "New", ("feature",), day=5), make_pull_request(1, "Old", ("feature",), day=1)]
    assert build_changelog(pull_requests, Configuration(sort=sort, pr_template="- ${{TITLE}}")) == expected


def test_pull_request_placeholders() -> None:
    """Test that every pull request placeholder is substituted."""
    pull_request = make_pull_request(
        7,
        "Add X",
        ("feature", "api"),
        milestone="v1.0",
        body="Details",
        assignees=("alice", "bob"),
        requested_reviewers=("carol",),
    )
    configuration = Configuration(
        pr_template="${{TITLE}}|${{NUMBER}}|${{URL}}|${{MERGED_AT}}|${{AUTHOR}}|${{LABELS}}|${{MILESTONE}}|${{BODY}}|${{ASSIGNEES}}|${{REVIEWERS}}"
    )

    assert build_changelog([pull_request], configuration) == (
        "## 🚀 Features\n"
        "Add X|7|https://github.com/octo/repo/pull/7|2024-04-01T00:00:00+00:00|octocat|api, feature|v1.0|Details|alice, bob|carol"
    )


def test_global_placeholders() -> None:
    """Test that release details are available to the global template."""
    configuration = Configuration(template="${{OWNER}}/${{REPO}} ${{FROM_TAG}}...${{TO_TAG}}\n${{CHANGELOG}}", pr_template="- ${{TITLE}}")
    context = ChangelogContext(owner="octo", repo="repo", from_tag="v1.0.0", to_tag="v1.1.0")

    changelog = build_changelog([make_pull_request(1, "Add X", ("feature",))], configuration, context)

    assert changelog == "octo/repo v1.0.0...v1.1.0\n## 🚀 Features\n- Add X"


def test_transformers_literal_and_regex() -> None:
    """Test that literal transformers replace text verbatim and regex transformers support groups."""
    transformers = (
        Transformer(pattern="[skip ci]", target=""),
        Transformer(pattern=r"JIRA-(\d+)", target=r"[JIRA-\1](https://jira.example.com/JIRA-\1)", regex=True),
    )
    assert apply_transformers("- JIRA-12 Add X [skip ci]", transformers) == "- [JIRA-12](https://jira.example.com/JIRA-12) Add X "


def test_invalid_regex_transformer_is_skipped() -> None:
    """Test that a transformer with an invalid expression leaves the text untouched."""
    assert apply_transformers("- Add X", (Transformer(pattern="(", target="", regex=True),)) == "- Add X"


def test_transformers_applied_to_rendered_entries() -> None:
    """Test that transformers rewrite the rendered entry."""
    configuration = Configuration(pr_template="- ${{TITLE}}", transformers=(Transformer(pattern="feat: ", target=""),))
    assert build_changelog([make_pull_request(1, "feat: Add X", ("feature",))], configuration) == "## 🚀 Features\n- Add X"


def test_fill_template_leaves_unknown_placeholders() -> None:
    """Test that placeholders without values are kept as-is."""
    assert fill_template("${{TITLE}} ${{UNKNOWN}}", {"TITLE": "X"}) == "X ${{UNKNOWN}}"


def test_placeholder_text_in_values_is_not_substituted() -> None:
    """Test that placeholder text inside pull request values is rendered verbatim."""
    pull_request = make_pull_request(42, "Document ${{NUMBER}} placeholder", ("feature",), body="use ${{TO_TAG}} in template")
    configuration = Configuration(pr_template="- ${{TITLE}}\n${{BODY}}")
    context = ChangelogContext(owner="octo", repo="repo", from_tag="v1", to_tag="v9")

    changelog = build_changelog([pull_request], configuration, context)

    assert changelog == "## 🚀 Features\n- Document ${{NUMBER}} placeholder\nuse ${{TO_TAG}} in template"


def test_markdown_braces_are_plain_text() -> None:
    """Test that Markdown using braces passes through the templates unchanged."""
    configuration = Configuration(template="{#release} {% raw %}\n${{CHANGELOG}}\n", pr_template="- ${{TITLE}} {{not a placeholder}}")
    changelog = build_changelog([make_pull_request(1, "Add X", ("feature",))], configuration)
    assert changelog == "{#release} {% raw %}\n## 🚀 Features\n- Add X {{not a placeholder}}\n"
