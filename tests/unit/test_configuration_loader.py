"""Unit tests for loading the run configuration."""

import json
from pathlib import Path

import pytest

from changelog_builder.configuration.exceptions import ConfigurationLoadError
from changelog_builder.configuration.loader import load_configuration
from changelog_builder.configuration.models import Category, Configuration, SortOrder, Transformer


def test_no_input_gives_defaults() -> None:
    """Test that the default configuration is used without input."""
    assert load_configuration() == Configuration()


def test_load_json_file(tmp_path: Path) -> None:
    """Test loading a JSON configuration file."""
    path = tmp_path / "configuration.json"
    path.write_text(
        json.dumps(
            {
                "categories": [{"title": "## Changes", "labels": ["feature", "fix"]}],
                "transformers": [{"pattern": "feat: ", "target": ""}],
                "exclude_merge_branches": ["octo/qa"],
                "sort": "desc",
                "use_metadata_hash": True,
            }
        ),
        encoding="utf-8",
    )

    configuration = load_configuration(path=path)

    assert configuration.categories == (Category(title="## Changes", labels=("feature", "fix")),)
    assert configuration.transformers == (Transformer(pattern="feat: ", target=""),)
    assert configuration.exclude_merge_branches == ("octo/qa",)
    assert configuration.sort == SortOrder.DESC
    assert configuration.use_metadata_hash is True
    assert configuration.max_pull_requests == 200


def test_load_yaml_file(tmp_path: Path) -> None:
    """Test loading a YAML configuration file."""
    path = tmp_path / "configuration.yml"
    path.write_text(
        "template: |\n  # Release\n  ${{CHANGELOG}}\nmax_back_track_time_days: 30\nmetadata_hash_date: authored\n",
        encoding="utf-8",
    )

    configuration = load_configuration(path=path)

    assert configuration.template == "# Release\n${{CHANGELOG}}\n"
    assert configuration.max_back_track_time_days == 30
    assert configuration.metadata_hash_date == "authored"


def test_empty_yaml_file_gives_defaults(tmp_path: Path) -> None:
    """Test that an empty YAML document means the defaults."""
    path = tmp_path / "configuration.yaml"
    path.write_text("", encoding="utf-8")
    assert load_configuration(path=path) == Configuration()


def test_inline_json_wins_over_file(tmp_path: Path) -> None:
    """Test that inline JSON takes precedence over a configuration file."""
    path = tmp_path / "configuration.json"
    path.write_text(json.dumps({"empty_template": "from file"}), encoding="utf-8")

    configuration = load_configuration(path=path, raw_json=json.dumps({"empty_template": "inline"}))

    assert configuration.empty_template == "inline"


@pytest.mark.parametrize(
    "raw_json",
    [
        pytest.param("{not json", id="malformed"),
        pytest.param("[1, 2]", id="not a mapping"),
        pytest.param('{"sort": "sideways"}', id="invalid sort"),
        pytest.param('{"categories": [{"labels": ["fix"]}]}', id="category without title"),
    ],
)
def test_invalid_inline_json(raw_json: str) -> None:
    """Test that invalid inline configuration raises ConfigurationLoadError."""
    with pytest.raises(ConfigurationLoadError, match="source: inline"):
        load_configuration(raw_json=raw_json)


def test_missing_file(tmp_path: Path) -> None:
    """Test that a missing configuration file raises ConfigurationLoadError."""
    with pytest.raises(ConfigurationLoadError, match="not found"):
        load_configuration(path=tmp_path / "missing.json")


def test_unparsable_yaml_file(tmp_path: Path) -> None:
    """Test that malformed YAML raises ConfigurationLoadError."""
    path = tmp_path / "configuration.yaml"
    path.write_text("categories: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigurationLoadError, match="could not be parsed"):
        load_configuration(path=path)


@pytest.mark.parametrize(
    "raw_json",
    [
        pytest.param('{"exclude_merge_branches": ["octo/qa", "/[unclosed/"]}', id="invalid exclude regex"),
        pytest.param('{"pr_template": "- ${{TITLE"}', id="unclosed placeholder"),
    ],
)
def test_invalid_patterns_rejected_on_load(raw_json: str) -> None:
    """Test that patterns and templates that cannot compile fail at load time."""
    with pytest.raises(ConfigurationLoadError, match="Configuration is invalid"):
        load_configuration(raw_json=raw_json)


def test_literal_exclude_pattern_with_brackets_is_accepted() -> None:
    """Test that only slash-wrapped exclude patterns are compiled."""
    configuration = load_configuration(raw_json='{"exclude_merge_branches": ["[unclosed"]}')
    assert configuration.exclude_merge_branches == ("[unclosed",)
