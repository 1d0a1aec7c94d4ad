"""Main entry point for the stats cache proxy."""

import logging
import sys
from typing import NoReturn

import uvicorn
from dotenv import load_dotenv
from pydantic import ValidationError

from statscache.config import get_settings, load_settings
from statscache.errors import ConfigError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> NoReturn:
    """Main entry point."""
    # Load .env file
    load_dotenv()

    try:
        configure_logging(get_settings().log_level)
        settings = load_settings()
    except ValidationError as e:
        configure_logging("INFO")
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    from statscache.api.app import create_app
    from statscache.proxy.service import create_proxy

    app = create_app(proxy=create_proxy(settings))

    logger.info(f"Server running on http://{settings.api_host}:{settings.api_port}")
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)
    sys.exit(0)


if __name__ == "__main__":
    main()
