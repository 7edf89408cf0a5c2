"""Tests for the edit orchestrator: step ordering and workspace release."""

import pytest

from ghedit.config import RunConfig
from ghedit.orchestrator import EditOrchestrator


def make_config(**overrides):
    values = {
        "repo": "github.com/acme/app",
        "branch": "main",
        "file": "lint.go",
        "pattern": r"// linter:\d+",
        "replacement": "// linter:9999",
        "token": "tok",
        "username": "bot",
    }
    values.update(overrides)
    return RunConfig(**values)


def run(config, runner, workspace_root, **kwargs):
    orchestrator = EditOrchestrator(
        config=config, runner=runner, workspace_root=workspace_root, **kwargs
    )
    return orchestrator.run()


class TestEditOrchestrator:

    def test_successful_run(self, fake_runner, workspace_root):
        result = run(make_config(), fake_runner, workspace_root)

        assert result.success
        assert result.errors == []
        assert result.replacements == 1
        assert result.committed and result.pushed
        assert fake_runner.subcommands == ["clone", "checkout", "add", "commit", "push"]
        assert list(workspace_root.iterdir()) == []

    def test_commit_message_is_passed(self, fake_runner, workspace_root):
        run(make_config(message="Bump linter id"), fake_runner, workspace_root)

        assert ["commit", "-m", "Bump linter id"] in [args for args, _ in fake_runner.calls]

    def test_progress_is_reported(self, fake_runner, workspace_root):
        updates = []

        run(
            make_config(),
            fake_runner,
            workspace_root,
            on_progress=lambda message, current, total: updates.append((current, total)),
        )

        assert [current for current, _ in updates] == [1, 2, 3, 4, 5, 6]
        assert all(total == 6 for _, total in updates)

    @pytest.mark.parametrize("failing", ["clone", "checkout", "add", "commit", "push"])
    def test_workspace_removed_when_git_step_fails(self, fake_runner, workspace_root, failing):
        fake_runner.fail[failing] = f"{failing} exploded"

        result = run(make_config(), fake_runner, workspace_root)

        assert not result.success
        assert any(f"{failing} exploded" in error for error in result.errors)
        assert fake_runner.subcommands[-1] == failing
        assert list(workspace_root.iterdir()) == []

    def test_missing_file_stops_before_commit(self, fake_runner, workspace_root):
        result = run(make_config(file="missing.go"), fake_runner, workspace_root)

        assert not result.success
        assert "replace" in result.summary
        assert "add" not in fake_runner.subcommands
        assert "push" not in fake_runner.subcommands
        assert list(workspace_root.iterdir()) == []

    def test_invalid_pattern_stops_before_commit(self, fake_runner, workspace_root):
        result = run(make_config(pattern="(unclosed"), fake_runner, workspace_root)

        assert not result.success
        assert any("(unclosed" in error for error in result.errors)
        assert "commit" not in fake_runner.subcommands
        assert list(workspace_root.iterdir()) == []

    def test_empty_branch_stops_before_edit(self, fake_runner, workspace_root):
        result = run(make_config(branch=""), fake_runner, workspace_root)

        assert not result.success
        assert result.replacements == 0
        assert fake_runner.subcommands == ["clone"]
        assert list(workspace_root.iterdir()) == []

    def test_dry_run_skips_commit_and_push(self, fake_runner, workspace_root):
        result = run(make_config(dry_run=True), fake_runner, workspace_root)

        assert result.success
        assert result.replacements == 1
        assert not result.committed and not result.pushed
        assert fake_runner.subcommands == ["clone", "checkout"]
        assert result.warnings
        assert list(workspace_root.iterdir()) == []

    def test_workspace_creation_failure(self, fake_runner, tmp_path):
        result = run(make_config(), fake_runner, tmp_path / "missing")

        assert not result.success
        assert result.clone_path is None
        assert fake_runner.calls == []

    def test_cleanup_failure_fails_run(self, fake_runner, workspace_root, monkeypatch):
        def refuse(path):
            raise PermissionError("denied")

        monkeypatch.setattr("ghedit.repository.shutil.rmtree", refuse)

        result = run(make_config(), fake_runner, workspace_root)

        assert not result.success
        assert result.pushed
        assert any("remove" in error for error in result.errors)
        assert "could not be removed" in result.summary
