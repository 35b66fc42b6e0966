"""Object key layout for asset blobs: ``{prefix}/{principal}/{asset}/{filename}``."""

from __future__ import annotations

import os
import re
from urllib.parse import quote

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: str | None) -> str:
    if not filename:
        return "upload"
    name = os.path.basename(filename.replace("\\", "/"))
    # strip dangerous characters
    name = _UNSAFE_CHARS.sub("_", name.replace("\0", "")).strip("._")
    return name or "upload"


def encode_segment(value: str) -> str:
    """Percent-encode ``value`` so it always forms exactly one key segment."""
    encoded = quote(value, safe="")
    if encoded in {".", ".."}:
        return encoded.replace(".", "%2E")
    return encoded


def principal_prefix(principal_id: str, prefix: str = "assets") -> str:
    if not principal_id:
        raise ValueError("principal id must not be empty")
    return f"{prefix.strip('/')}/{encode_segment(principal_id)}/"


def asset_prefix(principal_id: str, asset_id: str, prefix: str = "assets") -> str:
    return f"{principal_prefix(principal_id, prefix)}{encode_segment(asset_id)}/"


def build_object_key(principal_id: str, asset_id: str, filename: str | None, prefix: str = "assets") -> str:
    return f"{asset_prefix(principal_id, asset_id, prefix)}{sanitize_filename(filename)}"


def owns_object_key(principal_id: str, key: str, prefix: str = "assets") -> bool:
    """True when ``key`` lies inside the principal's own folder."""
    if not principal_id or ".." in key.split("/"):
        return False
    return key.startswith(principal_prefix(principal_id, prefix))


__all__ = [
    "asset_prefix",
    "build_object_key",
    "encode_segment",
    "owns_object_key",
    "principal_prefix",
    "sanitize_filename",
]
