"""Document storage backed by SQLAlchemy (one row per record)."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from appregistry.db.models import AppRecordRow
from appregistry.db.session import get_session
from appregistry.repositories import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class SqlDocumentStorage:
    """Loads and replaces the whole collection inside single transactions."""

    def load(self) -> list[dict]:
        try:
            with get_session() as session:
                rows = session.execute(select(AppRecordRow).order_by(AppRecordRow.position)).scalars().all()
                return [row.to_record() for row in rows]
        except (SQLAlchemyError, RuntimeError) as exc:
            logger.error("Error reading records table: %s", exc)
            raise StorageReadError("Failed to read records table") from exc

    def save(self, records: list[dict]) -> None:
        try:
            with get_session() as session:
                with session.begin():
                    session.execute(delete(AppRecordRow))
                    session.add_all(
                        AppRecordRow.from_record(position, record) for position, record in enumerate(records)
                    )
        except (SQLAlchemyError, RuntimeError) as exc:
            logger.error("Error writing records table: %s", exc)
            raise StorageWriteError("Failed to write records table") from exc
