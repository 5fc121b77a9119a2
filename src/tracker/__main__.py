"""
Entry point for the Project Tracker API server.

    python -m tracker
    tracker-server

Reads host, port and log level from the loaded configuration (PORT wins).
"""

import logging
import sys

import uvicorn

from .config import get_config

logger = logging.getLogger(__name__)


def main() -> int:
    config = get_config()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        uvicorn.run(
            "tracker.main:app",
            host=config.api_host,
            port=config.api_port,
            log_level=config.log_level.lower(),
            reload=config.debug,
        )
    except KeyboardInterrupt:
        return 130
    except OSError as e:
        logger.error(f"Server failed to start: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
