"""Version-control command capability.

The operator never spawns processes itself. It hands argument lists and a
working directory to a ``GitRunner``, so tests can substitute a fake and
no step depends on the process-wide current directory.
"""

from __future__ import annotations

import os
import re
import subprocess
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union, runtime_checkable
from urllib.parse import quote

from .errors import GitCommandError
from .models import GitResult
from .utils.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

LOCAL_PREFIXES = ("./", "../")
SCP_LIKE = re.compile(r"^[\w.-]+@[\w.-]+:")


@runtime_checkable
class GitRunner(Protocol):
    """Runs one git subcommand and reports how it went."""

    def run(self, args: Sequence[str], cwd: Optional[PathLike] = None) -> GitResult:
        ...


class SubprocessGitRunner:
    """Runs git as a child process with captured output."""

    def __init__(
        self,
        binary: str = "git",
        env: Optional[dict[str, str]] = None,
        secrets: Sequence[str] = (),
    ) -> None:
        """Initialize the runner.

        Args:
            binary: Executable to invoke
            env: Extra environment variables for every invocation
            secrets: Values masked in logged output
        """
        self.binary = binary
        self.env = env or {}
        self.secrets = tuple(secrets)

    def run(self, args: Sequence[str], cwd: Optional[PathLike] = None) -> GitResult:
        """Run ``binary *args`` in ``cwd`` and wait for it to finish.

        Raises:
            GitCommandError: If the binary cannot be started at all
        """
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0", **self.env}
        subcommand = args[0] if args else ""

        try:
            completed = subprocess.run(
                [self.binary, *args],
                cwd=str(cwd) if cwd is not None else None,
                env=env,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise GitCommandError(
                subcommand, -1, detail=f"failed to run {self.binary} {subcommand}: {e}"
            ) from e

        if completed.stdout:
            logger.debug(redact(completed.stdout.rstrip(), *self.secrets))
        if completed.stderr:
            logger.debug(redact(completed.stderr.rstrip(), *self.secrets))

        return GitResult(
            args=list(args),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


def is_local_repo(repo: str) -> bool:
    """True for ``file://`` URLs and absolute or dot-relative filesystem paths."""
    return (
        repo.startswith("file://")
        or os.path.isabs(repo)
        or repo in (".", "..")
        or repo.startswith(LOCAL_PREFIXES)
    )


def is_ssh_repo(repo: str) -> bool:
    """True for ``ssh://`` and ``git://`` URLs and scp-style ``user@host:path``."""
    return repo.startswith(("ssh://", "git://")) or SCP_LIKE.match(repo) is not None


def build_clone_url(repo: str, username: str, token: str) -> str:
    """Build an HTTPS clone URL carrying basic-auth credentials.

    ``repo`` may be ``github.com/owner/name``, ``https://github.com/owner/name``
    or ``http://...``. Local paths and SSH remotes are returned unchanged;
    they authenticate without the token. Remote HTTPS URLs carry no
    credentials when no token is given.
    """
    if is_local_repo(repo) or is_ssh_repo(repo):
        return repo

    scheme = "https"
    location = repo
    for prefix in ("https://", "http://"):
        if repo.startswith(prefix):
            scheme = prefix[:-3]
            location = repo[len(prefix):]
            break

    if not token:
        return f"{scheme}://{location}"

    credentials = f"{quote(username, safe='')}:{quote(token, safe='')}"
    return f"{scheme}://{credentials}@{location}"


def redact(text: str, *secrets: str) -> str:
    """Mask every non-empty secret, raw or percent-encoded, in ``text``."""
    for secret in secrets:
        if not secret:
            continue
        for form in {secret, quote(secret, safe="")}:
            text = text.replace(form, "***")
    return text
