"""File operations scoped to a workspace.

Reads and writes keep the file's original line endings and raise
``FileOperationError`` with the path and operation on any failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import FileOperationError, RepositoryError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class FileManager:
    """Reads and writes text files inside a single root directory."""

    root: Path
    max_file_size_mb: int = 10
    encoding: str = "utf-8"

    @property
    def max_file_size_bytes(self) -> int:
        """Maximum file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    def resolve(self, relative_path: str) -> Path:
        """Resolve a path relative to the root, refusing to leave it.

        Args:
            relative_path: Path as given on the command line

        Returns:
            Absolute path inside the root

        Raises:
            RepositoryError: If the path points outside the root
        """
        root = self.root.resolve()
        candidate = (root / relative_path).resolve()
        if candidate != root and root not in candidate.parents:
            raise RepositoryError(f"File {relative_path!r} is outside the workspace {root}")
        return candidate

    def read_file(self, file_path: Path) -> str:
        """Read a whole text file.

        Args:
            file_path: Path to the file

        Returns:
            File contents with line endings untouched
        """
        if not file_path.is_file():
            raise FileOperationError("reading", file_path, "no such file")

        file_size = file_path.stat().st_size
        if file_size > self.max_file_size_bytes:
            raise FileOperationError(
                "reading", file_path, f"file too large ({file_size} bytes)"
            )

        try:
            with open(file_path, encoding=self.encoding, newline="") as fh:
                return fh.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileOperationError("reading", file_path, str(e)) from e

    def write_file(self, file_path: Path, content: str) -> None:
        """Overwrite a text file with new content."""
        try:
            with open(file_path, "w", encoding=self.encoding, newline="") as fh:
                fh.write(content)
        except OSError as e:
            raise FileOperationError("writing to", file_path, str(e)) from e

        logger.debug(f"Wrote {len(content)} characters to {file_path}")
