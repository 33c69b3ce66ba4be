"""SQLAlchemy model mirroring the JSON records document."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, Integer, String

from .session import Base


class AppRecordRow(Base):
    __tablename__ = "app_records"

    # Position in the collection; rows are rewritten together on every save.
    position = Column(Integer, primary_key=True, autoincrement=False)
    app_name = Column(String(255), nullable=False, index=True)
    app_path = Column(String(1024), nullable=False)
    app_owner = Column(String(255), nullable=False)
    is_valid = Column(Boolean, nullable=False, default=False)

    def to_record(self) -> dict:
        return {
            "appName": self.app_name,
            "appData": {
                "appPath": self.app_path,
                "appOwner": self.app_owner,
                "isValid": bool(self.is_valid),
            },
        }

    @classmethod
    def from_record(cls, position: int, record: dict) -> "AppRecordRow":
        app_data = record.get("appData") or {}
        return cls(
            position=position,
            app_name=record.get("appName"),
            app_path=app_data.get("appPath"),
            app_owner=app_data.get("appOwner"),
            is_valid=app_data.get("isValid"),
        )
