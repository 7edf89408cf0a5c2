"""Tests for configuration validation."""

import pytest

from ghedit.config import DEFAULT_USERNAME, RunConfig, validate_config
from ghedit.errors import ConfigError


def make_config(**overrides):
    values = {
        "repo": "github.com/acme/app",
        "branch": "main",
        "file": "lint.go",
        "pattern": r"// linter:\d+",
        "replacement": "// linter:9999",
        "token": "secret",
    }
    values.update(overrides)
    return RunConfig(**values)


class TestValidateConfig:

    def test_complete_config_has_no_warnings(self):
        assert validate_config(make_config()) == []

    @pytest.mark.parametrize(
        "field, flag",
        [("repo", "--repo"), ("branch", "--branch"), ("file", "--file")],
    )
    def test_missing_required_field_raises(self, field, flag):
        with pytest.raises(ConfigError, match=flag):
            validate_config(make_config(**{field: ""}))

    def test_whitespace_only_is_missing(self):
        with pytest.raises(ConfigError, match="--branch"):
            validate_config(make_config(branch="   "))

    def test_repo_checked_before_branch(self):
        with pytest.raises(ConfigError, match="--repo"):
            validate_config(make_config(repo="", branch="", file=""))

    def test_optional_fields_only_warn(self):
        warnings = validate_config(make_config(pattern="", replacement="", token=""))

        assert len(warnings) == 3
        assert any("--regEx" in w for w in warnings)
        assert any("--val" in w for w in warnings)
        assert any("--token" in w for w in warnings)


class TestRunConfig:

    def test_is_immutable(self):
        config = make_config()
        with pytest.raises(AttributeError):
            config.branch = "other"

    def test_default_commit_message_names_file(self):
        assert make_config().commit_message == "Update lint.go"
        assert make_config(message="bump").commit_message == "bump"

    def test_default_username(self):
        assert make_config().username == DEFAULT_USERNAME

    def test_rows_mask_token(self):
        rows = dict(make_config(token="supersecret").as_rows())

        assert rows["Token"] == "***"
        assert "supersecret" not in str(rows)
        assert dict(make_config(token="").as_rows())["Token"] == "(none)"
