"""Create (or recreate) the app_records table on DATABASE_URL."""
from __future__ import annotations

import argparse

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers AppRecordRow on Base.metadata


def create_all(engine: Engine | None = None, *, drop_first: bool = False) -> None:
    engine = engine or get_engine()
    if drop_first:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Create the records table")
    ap.add_argument("--drop", action="store_true", help="Drop the table before creating it")
    args = ap.parse_args()
    try:
        create_all(drop_first=args.drop)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Records table ready.")
