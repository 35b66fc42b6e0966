"""Validation of untrusted asset input.

The field helpers are pure: they either return a cleaned value or raise
:class:`ValidationError` naming the offending field, so callers can turn the
failure into a 400 response without inspecting the message.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from asset_server.core.config import AssetSettings

from .exceptions import ValidationError
from .models import ASSET_CATEGORIES, IMMUTABLE_FIELDS, AssetCreateInput, AssetUpdateInput


def require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field_name)
    return value.strip()


def optional_string(value: Any, field_name: str | None = None) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("Invalid string value", field_name)
    return value.strip() or None


def require_enum(value: Any, allowed_values: Iterable[str], field_name: str) -> str:
    allowed = tuple(allowed_values)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name.capitalize()} is required", field_name)
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise ValidationError(
            f"Invalid {field_name}. Must be one of: {', '.join(allowed)}",
            field_name,
        )
    return normalized


def require_length(value: str, field_name: str, min_length: int, max_length: int) -> None:
    if len(value) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters", field_name)
    if len(value) > max_length:
        raise ValidationError(f"{field_name} must not exceed {max_length} characters", field_name)


def _require_object(body: Any) -> Mapping[str, Any]:
    if body is None:
        raise ValidationError("Request body is required")
    if not isinstance(body, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return body


def _optional_bounded(value: Any, field_name: str, max_length: int) -> Optional[str]:
    cleaned = optional_string(value, field_name)
    if cleaned is not None:
        require_length(cleaned, field_name, 0, max_length)
    return cleaned


def parse_create_payload(body: Any, limits: AssetSettings) -> AssetCreateInput:
    """Validate a create request body in field order and return the cleaned input."""
    data = _require_object(body)

    owner_id = require_non_empty_string(data.get("ownerId"), "ownerId")
    require_length(owner_id, "ownerId", 1, 255)

    name = require_non_empty_string(data.get("name"), "name")
    require_length(name, "name", 1, limits.name_max_length)

    category = require_enum(data.get("category"), ASSET_CATEGORIES, "category")
    description = _optional_bounded(data.get("description"), "description", limits.description_max_length)
    image_key = _optional_bounded(data.get("imageKey"), "imageKey", limits.image_key_max_length)

    return AssetCreateInput(
        owner_id=owner_id,
        name=name,
        category=category,
        description=description,
        image_key=image_key,
    )


def parse_update_payload(body: Any, limits: AssetSettings) -> AssetUpdateInput:
    """Validate a partial update body. Absent keys stay ``UNSET``; an empty body is allowed."""
    data = _require_object(body)

    for field_name, label in IMMUTABLE_FIELDS.items():
        if field_name in data:
            raise ValidationError(f"{label} cannot be changed", field_name)

    payload = AssetUpdateInput()
    if "name" in data:
        name = require_non_empty_string(data["name"], "name")
        require_length(name, "name", 1, limits.name_max_length)
        payload.name = name
    if "category" in data:
        payload.category = require_enum(data["category"], ASSET_CATEGORIES, "category")
    if "description" in data:
        payload.description = _optional_bounded(data["description"], "description", limits.description_max_length)
    if "imageKey" in data:
        payload.image_key = _optional_bounded(data["imageKey"], "imageKey", limits.image_key_max_length)
    return payload


__all__ = [
    "optional_string",
    "parse_create_payload",
    "parse_update_payload",
    "require_enum",
    "require_length",
    "require_non_empty_string",
]
