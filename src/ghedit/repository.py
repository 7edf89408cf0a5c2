"""Repository operator.

Owns one temporary clone for the lifetime of a run and performs each step
of the edit workflow against it. Every git call receives the workspace as
its working directory; the process-wide current directory is never changed.
"""

from __future__ import annotations

import re
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from .errors import (
    GitCommandError,
    RegexReplaceError,
    RepositoryError,
    WorkspaceError,
)
from .git import GitRunner, SubprocessGitRunner, build_clone_url, redact
from .models import GitResult, ReplaceResult
from .utils.file_ops import FileManager
from .utils.logger import get_logger

logger = get_logger(__name__)

WORKSPACE_PREFIX = "gh_clone_"

# $$, ${name} or $name; a name is a group number or a group name
TEMPLATE_REFERENCE = re.compile(r"\$(?:(\$)|\{([A-Za-z0-9_]+)\}|([A-Za-z0-9_]+))")


def expand_template(template: str, match: re.Match) -> str:
    """Expand ``$1``, ``${1}``, ``$name`` and ``${name}`` in ``template`` for one match.

    ``$$`` yields a literal dollar. References to groups that do not exist or
    did not participate in the match expand to nothing. Everything else,
    backslashes included, is copied literally.
    """

    def reference(ref: re.Match) -> str:
        if ref.group(1):
            return "$"
        name = ref.group(2) or ref.group(3)
        try:
            return match.group(int(name) if name.isdigit() else name) or ""
        except IndexError:
            return ""

    return TEMPLATE_REFERENCE.sub(reference, template)


class RepositoryOperator:
    """Clones, edits, commits and pushes one repository in a private workspace."""

    def __init__(
        self,
        token: str,
        username: str,
        runner: Optional[GitRunner] = None,
        workspace_root: Optional[Path] = None,
    ) -> None:
        """Create the workspace.

        Args:
            token: Access token embedded in the clone URL
            username: Basic-auth user paired with the token
            runner: Git capability; defaults to the ``git`` executable
            workspace_root: Parent for the workspace; defaults to the system temp dir

        Raises:
            WorkspaceError: If the directory cannot be created
        """
        self.token = token
        self.username = username
        self.runner = runner or SubprocessGitRunner(secrets=(token,))

        parent = workspace_root or Path(tempfile.gettempdir())
        try:
            self.clone_path = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=workspace_root))
        except OSError as e:
            raise WorkspaceError("create", parent, str(e)) from e

        self.files = FileManager(root=self.clone_path)
        self._released = False
        logger.info(f"Created workspace: {self.clone_path}")

    def __enter__(self) -> RepositoryOperator:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    @property
    def released(self) -> bool:
        return self._released

    def _git(self, subcommand: str, *args: str) -> GitResult:
        """Run a git subcommand inside the workspace, raising on failure."""
        return self._run([subcommand, *args], cwd=self.clone_path)

    def _run(self, args: Sequence[str], cwd: Optional[Path]) -> GitResult:
        subcommand = args[0]
        try:
            result = self.runner.run(list(args), cwd=cwd)
        except GitCommandError as e:
            raise GitCommandError(
                e.subcommand, e.returncode, detail=redact(str(e), self.token)
            ) from None

        if not result.success:
            raise GitCommandError(
                subcommand,
                result.returncode,
                redact(result.output, self.token),
            )
        return result

    def clone(self, repo: str) -> None:
        """Clone ``repo`` into the workspace unless it already holds a clone."""
        if (self.clone_path / ".git").exists():
            logger.info(f"Workspace {self.clone_path} already holds a clone, skipping")
            return

        url = build_clone_url(repo, self.username, self.token)
        logger.info(f"Cloning {redact(url, self.token)} into {self.clone_path}")
        self._run(["clone", url, str(self.clone_path)], cwd=None)

    def checkout(self, branch: str) -> None:
        """Check out ``branch`` in the workspace."""
        if not branch:
            raise RepositoryError("Cannot check out an empty branch name")

        self._git("checkout", branch)
        logger.info(f"Checked out branch: {branch}")

    def regex_replace(self, file: str, pattern: str, replacement: str) -> ReplaceResult:
        """Replace every match of ``pattern`` in one file.

        Args:
            file: Path relative to the repository root
            pattern: Regular expression; an empty pattern leaves the file alone
            replacement: Replacement text; ``$1`` and ``${name}`` are expanded,
                backslashes are kept as written

        Returns:
            ReplaceResult describing what changed

        Raises:
            FileOperationError: If the file cannot be read or written
            RegexReplaceError: If the pattern is invalid
        """
        file_path = self.files.resolve(file)
        content = self.files.read_file(file_path)
        result = ReplaceResult(file_path=file_path, pattern=pattern)

        if not pattern:
            logger.warning(f"Empty regex pattern, leaving {file_path} unchanged")
            return result

        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise RegexReplaceError(pattern, str(e)) from e

        new_content, result.replacements = regex.subn(
            lambda match: expand_template(replacement, match), content
        )

        if new_content == content:
            logger.warning(f"Pattern '{pattern}' produced no changes in '{file_path}'")
            return result

        self.files.write_file(file_path, new_content)
        result.written = True
        logger.info(
            f"Replaced {result.replacements} occurrence(s) of '{pattern}' in '{file_path}'"
        )
        return result

    def commit(self, message: str) -> None:
        """Stage everything in the workspace and commit it."""
        self._git("add", ".")
        self._git("commit", "-m", message)
        logger.info(f"Committed changes with message: {message}")

    def push(self) -> None:
        """Push the checked out head to ``origin``."""
        self._git("push", "origin", "HEAD")
        logger.info("Pushed changes to the remote repository")

    def cleanup(self) -> None:
        """Remove the workspace. Safe to call more than once.

        Raises:
            WorkspaceError: If the directory cannot be removed
        """
        if self._released:
            return

        logger.info(f"Removing workspace: {self.clone_path}")
        try:
            if self.clone_path.exists():
                shutil.rmtree(self.clone_path)
        except OSError as e:
            raise WorkspaceError("remove", self.clone_path, str(e)) from e
        self._released = True
