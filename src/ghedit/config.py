"""Run configuration and its validation."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigError
from .utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USERNAME = "x-access-token"


@dataclass(frozen=True)
class RunConfig:
    """Everything one run needs, collected from the command line."""

    repo: str
    branch: str
    file: str
    pattern: str = ""
    replacement: str = ""
    token: str = ""
    username: str = DEFAULT_USERNAME
    message: str = ""
    dry_run: bool = False

    @property
    def commit_message(self) -> str:
        return self.message or f"Update {self.file}"

    def as_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs for display, with the token masked."""
        return [
            ("Repository", self.repo),
            ("Branch", self.branch),
            ("File", self.file),
            ("Regex", self.pattern),
            ("Value", self.replacement),
            ("Username", self.username),
            ("Token", "***" if self.token else "(none)"),
            ("Message", self.commit_message),
            ("Dry run", "yes" if self.dry_run else "no"),
        ]


def validate_config(config: RunConfig) -> list[str]:
    """Check that the required settings are present.

    Args:
        config: Configuration collected from the command line

    Returns:
        Warnings for optional settings that were left empty

    Raises:
        ConfigError: If the repository, branch or file is missing
    """
    if not config.repo.strip():
        raise ConfigError("Repository (--repo) is required.")
    if not config.branch.strip():
        raise ConfigError("Branch (--branch) is required.")
    if not config.file.strip():
        raise ConfigError("File (--file) to modify is required.")

    warnings = []
    if not config.pattern:
        warnings.append("No regex pattern provided (--regEx). Proceeding without regex substitution.")
    if not config.replacement:
        warnings.append("No value provided (--val). Matches will be replaced with an empty string.")
    if not config.token:
        warnings.append("No token provided (--token). Cloning without credentials.")

    for warning in warnings:
        logger.warning(warning)

    logger.info("Configuration validation completed successfully.")
    return warnings


def log_config(config: RunConfig) -> None:
    """Write the resolved configuration to the log, token masked."""
    logger.info("Resolved configuration:")
    for label, value in config.as_rows():
        logger.info(f"{label:<12}: {value}")
