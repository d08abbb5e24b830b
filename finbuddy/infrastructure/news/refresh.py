"""
CLI entry point for one news refresh cycle.

This script is the Composition Root for the refresh use-case: it wires the
provider chain and the news store into NewsService and runs refresh() once.
Schedule it (cron, EventBridge, ...) to keep the news window current:

    python -m finbuddy.infrastructure.news.refresh
"""

import logging
import sys

from dotenv import load_dotenv

from finbuddy.infrastructure.config import get_settings
from finbuddy.infrastructure.entrypoints.wiring import build_news_service
from finbuddy.infrastructure.logging_config import configure_logging
from finbuddy.infrastructure.secrets.secrets_manager_adapter import bootstrap_secrets

logger = logging.getLogger(__name__)


def main() -> int:
    load_dotenv()
    bootstrap_secrets()
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    result = build_news_service(settings).refresh()
    if not result.success:
        logger.error("News refresh failed: %s", result.error)
        return 1

    logger.info(
        "News refresh complete: %d inserted, %d deleted, %d stored",
        result.inserted,
        result.deleted,
        result.total_stored,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
