"""Tests for config loading, validation and path resolution."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from skillbook.utils.config import Config, LintConfig


class TestPathResolution:
    """Tests for path resolution against workspace."""

    def test_resolves_all_relative_paths_against_workspace(self):
        """All relative paths should be resolved to absolute."""
        config = Config(workspace=Path("/workspace"))

        assert config.skills_path == Path("/workspace/skills")
        assert config.commands_path == Path("/workspace/commands")
        assert config.readme_path == Path("/workspace/README.md")
        assert config.logging_path == Path("/workspace/.logs")

    def test_resolves_custom_relative_paths(self):
        """Custom relative paths should be resolved against workspace."""
        config = Config(
            workspace=Path("/workspace"),
            skills_path=Path("docs/skills"),
            commands_path=Path(".claude/commands"),
        )

        assert config.skills_path == Path("/workspace/docs/skills")
        assert config.commands_path == Path("/workspace/.claude/commands")

    def test_rejects_absolute_skills_path(self):
        """Absolute skills_path should raise ValidationError."""
        with pytest.raises(ValidationError) as exc:
            Config(workspace=Path("/workspace"), skills_path=Path("/etc/skills"))

        assert "skills_path must be relative" in str(exc.value)


class TestLintConfig:
    """Tests for LintConfig validation."""

    def test_defaults(self):
        """No rules are disabled or overridden by default."""
        config = LintConfig()

        assert config.disable == []
        assert config.severity == {}
        assert config.warnings_as_errors is False

    def test_rejects_unknown_severity(self):
        """Severity overrides must be error or warning."""
        with pytest.raises(ValidationError) as exc:
            LintConfig(severity={"SB001": "fatal"})

        assert "must be 'error' or 'warning'" in str(exc.value)


class TestConfigFiles:
    """Tests for config file loading."""

    def test_loads_without_any_files(self, tmp_path):
        """Both config files are optional."""
        config = Config.load(tmp_path)

        assert config.workspace == tmp_path
        assert config.skills_path == tmp_path / "skills"

    def test_missing_workspace_raises(self, tmp_path):
        """A missing workspace raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "nope")

    def test_local_config_overrides_user(self, tmp_path):
        """Local config is deep-merged on top of the shared config."""
        (tmp_path / "skillbook.yaml").write_text(
            yaml.dump({"lint": {"disable": ["SB012"], "warnings_as_errors": True}})
        )
        (tmp_path / "skillbook.local.yaml").write_text(
            yaml.dump({"lint": {"warnings_as_errors": False}})
        )

        config = Config.load(tmp_path)

        assert config.lint.disable == ["SB012"]
        assert config.lint.warnings_as_errors is False

    def test_invalid_config_raises(self, tmp_path):
        """Out-of-range values raise ValidationError."""
        (tmp_path / "skillbook.yaml").write_text("api:\n  port: 99999\n")

        with pytest.raises(ValidationError):
            Config.load(tmp_path)


class TestConfigSetters:
    """Tests for writing config values."""

    def test_set_local_writes_file_and_memory(self, tmp_path):
        """set_local persists dot-notation keys and updates the instance."""
        config = Config.load(tmp_path)

        config.set_local("lint.warnings_as_errors", True)

        assert config.lint.warnings_as_errors is True
        data = yaml.safe_load((tmp_path / "skillbook.local.yaml").read_text())
        assert data == {"lint": {"warnings_as_errors": True}}
        assert Config.load(tmp_path).lint.warnings_as_errors is True

    def test_to_user_yaml_round_trips(self, tmp_path):
        """to_user_yaml output loads back to the same settings."""
        config = Config(workspace=tmp_path, skills_path=Path("docs/skills"))

        (tmp_path / "skillbook.yaml").write_text(config.to_user_yaml())
        reloaded = Config.load(tmp_path)

        assert reloaded.skills_path == tmp_path / "docs/skills"
        assert reloaded.lint == config.lint
