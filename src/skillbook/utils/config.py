"""Configuration management for skillbook."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

USER_CONFIG_FILE = "skillbook.yaml"
LOCAL_CONFIG_FILE = "skillbook.local.yaml"


# ============================================================================
# Configuration Models
# ============================================================================


class LintConfig(BaseModel):
    """Lint rule selection and severity configuration."""

    disable: list[str] = Field(default_factory=list)
    severity: dict[str, str] = Field(default_factory=dict)  # rule -> error|warning
    warnings_as_errors: bool = False

    @field_validator("severity")
    @classmethod
    def severity_must_be_known(cls, v: dict[str, str]) -> dict[str, str]:
        for rule, level in v.items():
            if level not in ("error", "warning"):
                raise ValueError(
                    f"severity for '{rule}' must be 'error' or 'warning', got: {level}"
                )
        return v


class ApiConfig(BaseModel):
    """HTTP API configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config(BaseModel):
    """
    Main configuration for skillbook.

    Configuration is loaded from the corpus workspace:
    1. skillbook.yaml - Shared configuration, checked in with the corpus
    2. skillbook.local.yaml - Local overrides (optional, overrides shared)

    Both files are optional. Pydantic defaults are used for fields not
    specified in config files.
    """

    workspace: Path
    skills_path: Path = Field(default=Path("skills"))
    commands_path: Path = Field(default=Path("commands"))
    readme_path: Path = Field(default=Path("README.md"))
    logging_path: Path = Field(default=Path(".logs"))
    lint: LintConfig = Field(default_factory=LintConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve relative paths to absolute using workspace."""
        for field_name in (
            "skills_path",
            "commands_path",
            "readme_path",
            "logging_path",
        ):
            path = getattr(self, field_name)
            if path.is_absolute():
                raise ValueError(f"{field_name} must be relative, got: {path}")
            setattr(self, field_name, self.workspace / path)
        return self

    @classmethod
    def load(cls, workspace_dir: Path) -> "Config":
        """
        Load configuration from a corpus workspace.

        Args:
            workspace_dir: Root directory of the skill corpus

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            FileNotFoundError: If workspace directory doesn't exist
            ValidationError: If configuration is invalid
        """
        if not workspace_dir.is_dir():
            raise FileNotFoundError(f"Workspace not found: {workspace_dir}")

        config_data: dict[str, Any] = {"workspace": workspace_dir}

        user_config = workspace_dir / USER_CONFIG_FILE
        local_config = workspace_dir / LOCAL_CONFIG_FILE

        if user_config.exists():
            with open(user_config) as f:
                user_data = yaml.safe_load(f) or {}
            config_data = cls._deep_merge(config_data, user_data)

        # Deep merge local config (overrides shared)
        if local_config.exists():
            with open(local_config) as f:
                local_data = yaml.safe_load(f) or {}
            config_data = cls._deep_merge(config_data, local_data)

        return cls.model_validate(config_data)

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Deep merge override dict into base dict.

        Args:
            base: Base dictionary
            override: Override dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _set_nested(self, obj: dict, key: str, value: Any) -> None:
        """Set a nested value in a dict using dot notation."""
        keys = key.split(".")
        for k in keys[:-1]:
            if k not in obj or not isinstance(obj[k], dict):
                obj[k] = {}
            obj = obj[k]
        obj[keys[-1]] = value

    def _update_in_memory(self, key: str, value: Any) -> None:
        """Update in-memory config, supporting nested attributes and dict keys."""
        keys = key.split(".")
        obj: Any = self
        for k in keys[:-1]:
            if isinstance(obj, dict):
                obj = obj[k]
            else:
                obj = getattr(obj, k)

        final_key = keys[-1]
        if isinstance(obj, dict):
            obj[final_key] = value
        else:
            setattr(obj, final_key, value)

    def set_local(self, key: str, value: Any) -> None:
        """
        Update a config value in skillbook.local.yaml.

        Args:
            key: Config key (supports dot notation, e.g., "lint.warnings_as_errors")
            value: New value
        """
        config_path = self.workspace / LOCAL_CONFIG_FILE

        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self._set_nested(data, key, value)

        with open(config_path, "w") as f:
            yaml.dump(data, f, sort_keys=False)

        self._update_in_memory(key, value)

    def to_user_yaml(self) -> str:
        """Render the workspace-relative settings as skillbook.yaml content."""
        data = {
            "skills_path": str(self.skills_path.relative_to(self.workspace)),
            "commands_path": str(self.commands_path.relative_to(self.workspace)),
            "readme_path": str(self.readme_path.relative_to(self.workspace)),
            "lint": self.lint.model_dump(),
            "api": self.api.model_dump(),
        }
        return yaml.dump(data, sort_keys=False)
