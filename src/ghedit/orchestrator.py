"""Orchestrator for a single edit run.

Runs the workflow in order:
1. Workspace creation
2. Clone
3. Branch checkout
4. Regex replacement
5. Commit
6. Push

The workspace is removed afterwards whether or not the steps succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from .config import RunConfig
from .errors import GhEditError, WorkspaceError
from .git import GitRunner
from .repository import RepositoryOperator
from .utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class EditResult:
    """Result from a complete run."""

    success: bool
    summary: str
    clone_path: Optional[Path] = None
    replacements: int = 0
    committed: bool = False
    pushed: bool = False
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class EditOrchestrator:
    """Sequences the repository operator for one configuration."""

    config: RunConfig
    runner: Optional[GitRunner] = None
    workspace_root: Optional[Path] = None
    on_progress: Optional[Callable[[str, int, int], None]] = None

    def __post_init__(self) -> None:
        self._current_step = 0
        self._total_steps = 6

    def _emit_progress(self, message: str) -> None:
        """Emit progress update."""
        self._current_step += 1
        if self.on_progress:
            self.on_progress(message, self._current_step, self._total_steps)
        logger.info(f"[{self._current_step}/{self._total_steps}] {message}")

    def run(self) -> EditResult:
        """Run every step and always release the workspace.

        Returns:
            EditResult with overall status
        """
        config = self.config
        result = EditResult(success=False, summary="")
        self._current_step = 0

        self._emit_progress("Creating workspace...")
        try:
            operator = RepositoryOperator(
                token=config.token,
                username=config.username,
                runner=self.runner,
                workspace_root=self.workspace_root,
            )
        except WorkspaceError as e:
            logger.error(str(e))
            result.errors.append(str(e))
            result.summary = "Run failed: workspace could not be created"
            return result

        result.clone_path = operator.clone_path
        stage = "clone"
        try:
            self._emit_progress(f"Cloning {config.repo}...")
            operator.clone(config.repo)

            stage = "checkout"
            self._emit_progress(f"Checking out {config.branch}...")
            operator.checkout(config.branch)

            stage = "replace"
            self._emit_progress(f"Editing {config.file}...")
            replaced = operator.regex_replace(config.file, config.pattern, config.replacement)
            result.replacements = replaced.replacements

            if config.dry_run:
                result.warnings.append("Dry run: commit and push skipped")
            else:
                stage = "commit"
                self._emit_progress("Committing changes...")
                operator.commit(config.commit_message)
                result.committed = True

                stage = "push"
                self._emit_progress("Pushing changes...")
                operator.push()
                result.pushed = True

        except GhEditError as e:
            logger.error(str(e))
            result.errors.append(str(e))
        finally:
            try:
                operator.cleanup()
            except WorkspaceError as e:
                logger.error(str(e))
                result.errors.append(str(e))

        result.success = not result.errors
        if result.success:
            result.summary = "Dry run completed" if config.dry_run else "Changes pushed"
        elif operator.released:
            result.summary = f"Run failed at {stage} stage"
        else:
            result.summary = "Run failed: workspace could not be removed"
        return result
