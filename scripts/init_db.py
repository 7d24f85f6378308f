# scripts/init_db.py

import logging

from inventory_admin.config import settings
from inventory_admin.db.engine import get_engine
from inventory_admin.db.schema import metadata
from inventory_admin.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def main():
    configure_logging(settings.LOG_LEVEL)
    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    logger.info("DB schema created at %s (%d tables).", engine.url, len(metadata.tables))


if __name__ == "__main__":
    main()
