# core/setup_db.py

import sys
import logging

from core.config import load_settings, configure_logging
from core.database import init_db
from core.exceptions import StorageUnavailable

logger = logging.getLogger(__name__)


def main() -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    logger.info("Creating patient_records table at %s...", settings.db_path)
    try:
        store = init_db(settings.db_path)
    except StorageUnavailable as e:
        logger.error("%s", e)
        return 1

    store.close()
    logger.info("Database initialized successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
