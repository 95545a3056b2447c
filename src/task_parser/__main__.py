"""TaskParser HTTP service."""

import logging
import sys

import uvicorn

from task_parser.factory import create_app, get_config


def main() -> int:
    """Run the application."""
    config = get_config()

    # Configure logging
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    uvicorn.run(
        create_app(),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
