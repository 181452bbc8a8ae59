"""Shared constants used across the application."""

# Run Configuration Defaults
# --------------------------

DEFAULT_MAX_TAGS_TO_FETCH = 200
"""Number of tags to request from the GitHub API when resolving release tags."""

DEFAULT_MAX_PULL_REQUESTS = 200
"""Maximum number of merged pull requests considered for a single release."""

DEFAULT_MAX_BACK_TRACK_TIME_DAYS = 90
"""Maximum number of days between the oldest and newest commit of a release window."""

DEFAULT_TEMPLATE = "${{CHANGELOG}}"
"""Global template hosting the rendered changelog."""

DEFAULT_PR_TEMPLATE = "- ${{TITLE}}\n   - PR: #${{NUMBER}}"
"""Template rendered once per pull request."""

DEFAULT_EMPTY_TEMPLATE = "- no changes"
"""Template used in place of the changelog when no entries were categorized."""

# Template Placeholders
# ---------------------

PLACEHOLDER_FORMAT = "${{{{{name}}}}}"
"""Format string producing a placeholder such as ``${{TITLE}}`` from its name."""

# GitHub API Settings
# -------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API URL (override for GitHub Enterprise Server)."""

GITHUB_MAX_PER_PAGE = 100
"""Largest page size accepted by the GitHub REST API."""
