"""One-off migration script: JSON records document -> SQL table."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

# Make the appregistry package importable when run as a plain script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from appregistry.core.config import get_settings
from appregistry.core.logging_setup import setup_logging
from appregistry.db.create_tables import create_all
from appregistry.repositories.json_storage import JsonDocumentStorage
from appregistry.repositories.sql_storage import SqlDocumentStorage

logger = logging.getLogger("migrate_to_sql")


def migrate() -> int:
    settings = get_settings()
    records = JsonDocumentStorage(settings.data_file).load()
    create_all()
    SqlDocumentStorage().save(records)
    return len(records)


if __name__ == "__main__":
    setup_logging(get_settings().log_level)
    count = migrate()
    logger.info("Migrated %d records from JSON to SQL.", count)
