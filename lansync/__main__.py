"""Run the LAN lobby server with uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from lansync.core.config import load_settings
from lansync.main import create_app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.lansync_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(settings=settings),
        host=settings.lansync_app_host,
        port=settings.lansync_app_port,
        log_level=settings.lansync_log_level.lower(),
    )


if __name__ == "__main__":
    main()
