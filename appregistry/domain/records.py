"""Domain helpers for application record validation and matching."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

REQUIRED_FIELDS = ("appName", "appData")
REQUIRED_APP_DATA_FIELDS = ("appPath", "appOwner", "isValid")
UPDATABLE_FIELDS = ("appOwner", "isValid")
UPDATE_FIELD_TYPES = {"appOwner": (str, "a string"), "isValid": (bool, "a boolean")}
SEARCH_FIELDS = ("appName", "appOwner", "isValid")


class ValidationError(ValueError):
    """Raised when a record does not have the expected structure."""


def validate_app_record(record: Any) -> bool:
    """
    Check that a record carries every field with the right primitive type.

    Only callers that need format enforcement invoke this; the record store
    never calls it on its own.
    """
    if not isinstance(record, Mapping):
        raise ValidationError("Record must be an object")
    for field in REQUIRED_FIELDS:
        if field not in record:
            raise ValidationError(f"Missing required field: {field}")
    app_data = record["appData"]
    if not isinstance(app_data, Mapping):
        raise ValidationError("appData must be an object")
    for field in REQUIRED_APP_DATA_FIELDS:
        if field not in app_data:
            raise ValidationError(f"Missing required appData field: {field}")

    if not isinstance(record["appName"], str):
        raise ValidationError("appName must be a string")
    if not isinstance(app_data["appPath"], str):
        raise ValidationError("appPath must be a string")
    if not isinstance(app_data["appOwner"], str):
        raise ValidationError("appOwner must be a string")
    if not isinstance(app_data["isValid"], bool):
        raise ValidationError("isValid must be a boolean")
    return True


def validate_collection(records: Any) -> bool:
    """Validate every record of a collection, naming the first bad index."""
    if not isinstance(records, list):
        raise ValidationError("Collection must be a list of records")
    for index, record in enumerate(records):
        try:
            validate_app_record(record)
        except ValidationError as exc:
            raise ValidationError(f"Record #{index}: {exc}") from exc
    return True


def to_bool(value: Any) -> bool:
    """Normalize a search flag: True and the text "true" are true, anything else is false."""
    return value is True or value == "true"


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _contains(haystack: Any, needle: Any) -> bool:
    return str(needle).lower() in str(haystack or "").lower()


def matches_criteria(record: Mapping[str, Any], criteria: Mapping[str, Any]) -> bool:
    """Return True when the record satisfies every non-empty criterion."""
    app_data = record.get("appData") or {}
    for key, value in criteria.items():
        if _is_blank(value):
            continue
        if key == "appName":
            if not _contains(record.get("appName"), value):
                return False
        elif key == "appOwner":
            if not _contains(app_data.get("appOwner"), value):
                return False
        elif key == "isValid":
            if app_data.get("isValid") is not to_bool(value):
                return False
    return True


def invalid_update_fields(patch: Mapping[str, Any]) -> list[str]:
    """List patch keys that are not updatable, in the order they were sent."""
    return [field for field in patch if field not in UPDATABLE_FIELDS]


def wrong_type_update_fields(patch: Mapping[str, Any]) -> list[str]:
    """Describe updatable fields whose value has the wrong JSON type."""
    problems = []
    for field, (expected, label) in UPDATE_FIELD_TYPES.items():
        if field in patch and not isinstance(patch[field], expected):
            problems.append(f"{field} must be {label}")
    return problems


def find_duplicate_names(records: Iterable[Mapping[str, Any]]) -> list[str]:
    """Return appName values that appear more than once (first-seen order)."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for record in records:
        name = record.get("appName")
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    return duplicates
