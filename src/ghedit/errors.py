"""Exception types raised by ghedit.

Helpers raise these and never exit the process; the CLI is the single
place that turns them into an exit code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class GhEditError(Exception):
    """Base class for all ghedit failures."""


class ConfigError(GhEditError):
    """A required setting is missing."""


class WorkspaceError(GhEditError):
    """The temporary workspace could not be created or removed."""

    def __init__(self, operation: str, path: Union[str, Path], reason: str) -> None:
        self.operation = operation
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to {operation} workspace {path}: {reason}")


class FileOperationError(GhEditError):
    """Reading or writing the target file failed."""

    def __init__(self, operation: str, path: Union[str, Path], reason: str) -> None:
        self.operation = operation
        self.path = path
        self.reason = reason
        super().__init__(f"Error {operation} file {path}: {reason}")


class RepositoryError(GhEditError):
    """The operator was asked to do something it cannot do."""


class GitCommandError(GhEditError):
    """A git subcommand exited non-zero."""

    def __init__(
        self,
        subcommand: str,
        returncode: int,
        output: str = "",
        detail: Optional[str] = None,
    ) -> None:
        self.subcommand = subcommand
        self.returncode = returncode
        self.output = output
        message = detail or f"git {subcommand} failed with exit code {returncode}"
        if output:
            message = f"{message}: {output}"
        super().__init__(message)


class RegexReplaceError(GhEditError):
    """The pattern or replacement template is invalid."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Error compiling regex {pattern!r}: {reason}")
