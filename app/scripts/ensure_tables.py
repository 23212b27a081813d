import logging

from app.database import ensure_tables_exist
from app.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main():
    setup_logging()
    ensure_tables_exist()
    logger.info("DB table check complete: created only missing tables.")


if __name__ == "__main__":
    main()
