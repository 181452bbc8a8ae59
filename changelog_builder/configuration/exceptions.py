"""Contains exceptions raised when reconciling or loading application configuration."""

from pathlib import Path


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the GitHub authentication configuration is undefined."""

    pass


class RequiredConfigurationElementError(Exception):
    """Raised when a required configuration element is missing."""

    def __init__(self, name: str, cli_name: str, env_name: str) -> None:
        """Initializes the exception with the name of the missing element."""
        super().__init__(f"Missing required configuration element: {name} (command line option {cli_name}, environment variable {env_name})")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name


class ConfigurationLoadError(Exception):
    """Raised when the run configuration cannot be read or validated."""

    def __init__(self, message: str, source: Path | str | None = None) -> None:
        """Initializes the exception with the offending configuration source."""
        super().__init__(message if source is None else f"{message} (source: {source})")
        self.source = source
