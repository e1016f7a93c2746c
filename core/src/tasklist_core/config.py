from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from tasklist_core.home import TasklistPaths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)


class PathOverrides(BaseModel):
    logs_dir: str | None = None


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root log level name, e.g. DEBUG or INFO.")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        name = v.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level: {v}")
        return name


class StoreConfig(BaseModel):
    lock_timeout_s: float | None = Field(
        default=None,
        gt=0,
        description="Give up acquiring the task list lock after this many seconds (null: wait).",
    )


class UiConfig(BaseModel):
    title: str = Field(default="Tasks")


class CoreConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    paths: PathOverrides = Field(default_factory=PathOverrides)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    ui: UiConfig = Field(default_factory=UiConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_core_config(paths: TasklistPaths) -> CoreConfig:
    """Load config from ${TASKLIST_HOME}/config/core.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.core_config_path
    if not config_path.exists():
        return CoreConfig()

    raw = _read_json(config_path)
    return CoreConfig.model_validate(raw)


def write_core_config(paths: TasklistPaths, config: CoreConfig) -> None:
    """Persist config to ${TASKLIST_HOME}/config/core.json."""

    payload = config.model_dump(mode="json", exclude_none=True)
    paths.config_dir.mkdir(parents=True, exist_ok=True)
    paths.core_config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


def resolve_configured_paths(paths: TasklistPaths, config: CoreConfig) -> TasklistPaths:
    """Apply user-configurable path overrides from config.

    Only logs/ is configurable; config/ always lives under the home directory.
    """

    raw = config.paths.logs_dir
    if raw is None or not str(raw).strip():
        return paths

    logs_dir = Path(raw).expanduser()
    if not logs_dir.is_absolute():
        logs_dir = (paths.home / logs_dir).resolve()
    else:
        logs_dir = logs_dir.resolve()
    logs_dir.mkdir(parents=True, exist_ok=True)

    return TasklistPaths(home=paths.home, logs_dir=logs_dir, config_dir=paths.config_dir)
