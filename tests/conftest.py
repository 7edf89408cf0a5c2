"""Pytest configuration for tests.

Puts src/ on the path and provides a fake git runner.
"""

import sys
from pathlib import Path

import pytest
from loguru import logger

src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from ghedit.models import GitResult  # noqa: E402


class FakeGitRunner:
    """Records git calls; ``clone`` populates the target with ``files``."""

    def __init__(self, files=None, fail=None):
        self.files = files or {}
        self.fail = fail or {}
        self.calls = []

    def run(self, args, cwd=None):
        args = list(args)
        self.calls.append((args, cwd))
        subcommand = args[0]

        if subcommand in self.fail:
            return GitResult(args=args, returncode=1, stderr=self.fail[subcommand])

        if subcommand == "clone":
            target = Path(args[2])
            (target / ".git").mkdir()
            for name, content in self.files.items():
                path = target / name
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")

        return GitResult(args=args)

    @property
    def subcommands(self):
        return [args[0] for args, _ in self.calls]


@pytest.fixture
def workspace_root(tmp_path):
    """Parent directory for operator workspaces."""
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def fake_runner():
    return FakeGitRunner(files={"lint.go": "package lint\n\n// linter:1234\nfunc Lint() {}\n"})


@pytest.fixture
def log_messages():
    """Messages emitted through loguru while the test runs."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
