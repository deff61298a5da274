"""Resolve settings files and assemble the RunConfiguration."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from xa_app.services.run_config import RunConfiguration, ToolPaths
from xa_common.config.env import parse_bool_env, parse_path_env, parse_str_env
from xa_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_NAME = "config.yaml"


class ArchiveSettings(BaseModel):
    """Defaults read from the YAML settings file."""

    export_path: Optional[Path] = None
    identity: Optional[str] = None
    mobile_provision: Optional[str] = None
    notify: Optional[bool] = None
    reveal: Optional[bool] = None
    keep_symbols: Optional[bool] = None
    clean: Optional[bool] = None
    tools: ToolPaths = Field(default_factory=ToolPaths)

    model_config = {"extra": "ignore"}


class ConfigRepository:
    """Locate the settings file in the local filesystem."""

    def __init__(self, config_home: Optional[Path] = None) -> None:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
        self.config_home = (config_home or base) / "xcodearchive"
        self.default_target = self.config_home / DEFAULT_SETTINGS_NAME

    def resolve_settings_path(self, settings_path: Optional[Path]) -> Optional[Path]:
        if settings_path is not None:
            return Path(settings_path).expanduser()

        env_path = parse_path_env(os.environ.get("XA_CONFIG_PATH"))
        if env_path:
            return env_path

        if self.default_target.exists():
            return self.default_target
        return None

    def read_settings(self, path: Path) -> ArchiveSettings:
        try:
            with open(path, "r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except OSError as exc:
            raise ConfigurationError(
                f"Could not read settings file {path}: {exc}", context={"path": path}, cause=exc
            ) from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Settings file {path} is not valid YAML: {exc}", context={"path": path}, cause=exc
            ) from exc

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings file {path} must contain a mapping", context={"path": path}
            )
        try:
            return ArchiveSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid settings in {path}: {exc}", context={"path": path}, cause=exc
            ) from exc


def _env_settings() -> dict[str, Any]:
    values: dict[str, Any] = {
        "export_path": parse_path_env(os.environ.get("XA_EXPORT_PATH")),
        "identity": parse_str_env(os.environ.get("XA_IDENTITY")),
        "mobile_provision": parse_str_env(os.environ.get("XA_MOBILE_PROVISION")),
        "notify": parse_bool_env(os.environ.get("XA_NOTIFY")),
    }
    return {key: val for key, val in values.items() if val is not None}


class ConfigService:
    """Layer CLI options over environment, settings file and defaults."""

    def __init__(self, repository: Optional[ConfigRepository] = None) -> None:
        self.repository = repository or ConfigRepository()

    def load_settings(self, settings_path: Optional[Path] = None) -> ArchiveSettings:
        resolved = self.repository.resolve_settings_path(settings_path)
        if resolved is None:
            return ArchiveSettings()
        if settings_path is None and not resolved.exists():
            logger.warning("Settings file %s does not exist; using defaults", resolved)
            return ArchiveSettings()
        logger.info("Loading settings from %s", resolved)
        return self.repository.read_settings(resolved)

    def build_run_configuration(
        self,
        settings_path: Optional[Path] = None,
        **overrides: Any,
    ) -> RunConfiguration:
        """Merge the layers; ``None`` overrides mean "not given on the command line"."""
        settings = self.load_settings(settings_path)
        merged: dict[str, Any] = settings.model_dump(exclude_none=True)
        merged.update(_env_settings())
        merged.update({key: val for key, val in overrides.items() if val is not None})
        try:
            return RunConfiguration.model_validate(merged)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid options: {exc}", cause=exc) from exc
