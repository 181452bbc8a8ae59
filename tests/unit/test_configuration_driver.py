"""Unit tests for the configuration driver module."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

from changelog_builder.configuration import driver
from changelog_builder.configuration.config import BuildChangelogConfig
from changelog_builder.configuration.models import Configuration, GitHubAuthenticationType


def test_get_build_changelog_config_returns_reconciled_config() -> None:
    """Test that get_build_changelog_config runs the reconciliation and returns its result."""
    fake_config = BuildChangelogConfig(
        debug=True,
        github_api_url="https://api.github.com",
        github_authentication_type=GitHubAuthenticationType.PAT,
        github_pat_token="token",
        github_app_id=None,
        github_app_private_key_path=None,
        github_app_installation_id=None,
        repo="owner/repo",
        from_tag="v1.0.0",
        to_tag="v1.1.0",
        commit_mode=False,
        fail_on_error=True,
        configuration=Configuration(),
    )
    with patch(
        "changelog_builder.configuration.reconcile.reconcile_build_changelog_configuration",
        new=AsyncMock(return_value=fake_config),
    ) as mock_reconcile:
        result = driver.get_build_changelog_config(
            debug=True,
            github_pat_token="token",
            repo="owner/repo",
            from_tag="v1.0.0",
            to_tag="v1.1.0",
            configuration_path=Path("changelog.json"),
            fail_on_error=True,
        )

    assert result is fake_config
    mock_reconcile.assert_awaited_once()
    kwargs = mock_reconcile.await_args.kwargs
    assert kwargs["cli_repo"] == "owner/repo"
    assert kwargs["cli_configuration_path"] == Path("changelog.json")
    assert kwargs["cli_fail_on_error"] is True
    assert kwargs["cli_commit_mode"] is False
