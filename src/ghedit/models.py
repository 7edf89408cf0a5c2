"""Shared data models for ghedit.

Kept apart from the modules that produce them to avoid circular imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class GitResult:
    """Outcome of a single git invocation."""

    args: list[str] = field(default_factory=list)
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Most useful output for an error message."""
        return (self.stderr or self.stdout).strip()


@dataclass
class ReplaceResult:
    """Outcome of the regex replace step."""

    file_path: Path
    pattern: str
    replacements: int = 0
    written: bool = False
