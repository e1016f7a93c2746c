from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TasklistPaths:
    home: Path
    logs_dir: Path
    config_dir: Path

    @property
    def core_config_path(self) -> Path:
        return self.config_dir / "core.json"


def resolve_tasklist_home(environ: dict[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ

    raw = (env.get("TASKLIST_HOME") or "").strip()
    if raw:
        candidate = Path(raw).expanduser()
        # Never interpret TASKLIST_HOME relative to CWD.
        if not candidate.is_absolute():
            candidate = (Path.home() / candidate).resolve()
        else:
            candidate = candidate.resolve()
        return candidate

    def default_home() -> Path:
        if sys.platform.startswith("win"):
            base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
            if base:
                return Path(base) / "Tasklist"
            return Path.home() / "AppData" / "Local" / "Tasklist"

        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support" / "Tasklist"

        xdg = os.environ.get("XDG_DATA_HOME")
        if xdg:
            return Path(xdg) / "tasklist"
        return Path.home() / ".local" / "share" / "tasklist"

    return default_home().resolve()


def ensure_tasklist_layout(home: Path) -> TasklistPaths:
    home.mkdir(parents=True, exist_ok=True)

    logs_dir = home / "logs"
    config_dir = home / "config"

    for path in (logs_dir, config_dir):
        path.mkdir(parents=True, exist_ok=True)

    return TasklistPaths(home=home, logs_dir=logs_dir, config_dir=config_dir)
