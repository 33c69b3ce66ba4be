"""Application record use cases shared by the HTTP routers and scripts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from appregistry.domain.records import (
    UPDATABLE_FIELDS,
    invalid_update_fields,
    wrong_type_update_fields,
)
from appregistry.repositories.record_store import RecordStore


class AppServiceError(Exception):
    """Base exception for app use cases."""


class InvalidUpdatePayloadError(AppServiceError):
    """Raised when the update body is not a JSON object."""


class InvalidUpdateFieldsError(AppServiceError):
    """Raised when an update carries fields other than appOwner/isValid."""

    def __init__(self, invalid_fields: list[str]):
        super().__init__(f"Only {', '.join(UPDATABLE_FIELDS)} can be updated")
        self.invalid_fields = invalid_fields
        self.message = str(self)


@dataclass
class SearchResult:
    apps: list[dict]
    criteria: dict


class AppService:
    """Thin layer over the record store enforcing the API's input rules."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def list_apps(self) -> list[dict]:
        return self.store.load_all()

    def get_app(self, name: str) -> Optional[dict]:
        return self.store.find_by_name(name)

    def search_apps(
        self,
        app_name: Optional[str] = None,
        app_owner: Optional[str] = None,
        is_valid: Any = None,
    ) -> SearchResult:
        provided = {"appName": app_name, "appOwner": app_owner, "isValid": is_valid}
        criteria = {key: value for key, value in provided.items() if value is not None}
        return SearchResult(apps=self.store.search(criteria), criteria=criteria)

    def update_app(self, name: str, patch: Any) -> Optional[dict]:
        if not isinstance(patch, dict):
            raise InvalidUpdatePayloadError("Request body must be a JSON object")
        invalid = invalid_update_fields(patch)
        if invalid:
            raise InvalidUpdateFieldsError(invalid)
        wrong_types = wrong_type_update_fields(patch)
        if wrong_types:
            raise InvalidUpdatePayloadError("; ".join(wrong_types))
        return self.store.update(name, patch)

    def delete_app(self, name: str) -> Optional[dict]:
        return self.store.delete(name)
