from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

import uvicorn

from tasklist_core.app import LOG_FORMAT, create_app
from tasklist_core.config import load_core_config, resolve_configured_paths
from tasklist_core.home import ensure_tasklist_layout, resolve_tasklist_home


def main() -> None:
    home = resolve_tasklist_home()
    paths = ensure_tasklist_layout(home)

    config = load_core_config(paths)
    paths = resolve_configured_paths(paths, config)

    # Configure logging
    log_file = paths.logs_dir / "core.log"
    logging.basicConfig(
        level=config.logging.level,
        format=LOG_FORMAT,
        handlers=[
            RotatingFileHandler(
                log_file,
                maxBytes=config.logging.max_size_mb * 1024 * 1024,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            ),
            logging.StreamHandler(),
        ],
    )

    host = os.environ.get("TASKLIST_BIND") or config.network.bind_host

    env_port = os.environ.get("TASKLIST_PORT")
    port = int(env_port) if env_port else config.network.port

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
