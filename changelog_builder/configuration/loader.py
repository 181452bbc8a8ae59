"""Loads the changelog run configuration from a file or an inline JSON document."""

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from changelog_builder.configuration.exceptions import ConfigurationLoadError
from changelog_builder.configuration.models import Configuration
from changelog_builder.utils.yaml import load_yaml_file

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def read_configuration_file(path: Path) -> dict[str, Any]:
    """Read a JSON or YAML configuration file into a dictionary.

    Files ending in ``.yaml`` or ``.yml`` are parsed as YAML, everything else as JSON.

    Raises:
        ConfigurationLoadError: If the file is missing, unparsable, or not a mapping.
    """
    if not path.is_file():
        raise ConfigurationLoadError("Configuration file not found", source=path)
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = load_yaml_file(path)
        else:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
    except (json.JSONDecodeError, YAMLError) as exc:
        raise ConfigurationLoadError(f"Configuration file could not be parsed: {exc}", source=path) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationLoadError("Configuration must be a mapping", source=path)
    return data


def parse_configuration_json(raw_json: str) -> dict[str, Any]:
    """Parse an inline JSON configuration document."""
    try:
        data = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        raise ConfigurationLoadError(f"Inline configuration is not valid JSON: {exc}", source="inline") from exc
    if not isinstance(data, dict):
        raise ConfigurationLoadError("Configuration must be a mapping", source="inline")
    return data


def load_configuration(path: Path | None = None, raw_json: str | None = None) -> Configuration:
    """Build the run configuration.

    An inline JSON document takes precedence over a configuration file. When
    neither is given the default configuration is returned. Keys missing from
    the document keep their default values.

    Args:
        path: Optional path to a JSON or YAML configuration file.
        raw_json: Optional inline JSON configuration.

    Returns:
        The validated, immutable run configuration.

    Raises:
        ConfigurationLoadError: If the input cannot be parsed or fails validation.
    """
    if raw_json:
        data = parse_configuration_json(raw_json)
        source: Path | str = "inline"
    elif path is not None:
        data = read_configuration_file(path)
        source = path
    else:
        logger.info("No configuration provided, using defaults")
        return Configuration()

    try:
        configuration = Configuration.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationLoadError(f"Configuration is invalid: {exc}", source=source) from exc

    logger.info(
        "Loaded configuration",
        source=str(source),
        categories=len(configuration.categories),
        transformers=len(configuration.transformers),
        use_metadata_hash=configuration.use_metadata_hash,
    )
    return configuration
