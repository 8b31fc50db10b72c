"""Projection of stored rows into the API representation."""

from collections.abc import Mapping
from typing import Any

VIDEO_FIELDS = (
    "id", "title", "description", "src", "type", "poster", "duration",
    "resolution", "size", "status", "created_at", "updated_at",
    "category_name", "uploaded_by_username",
)

CATEGORY_FIELDS = ("id", "name")


def project_video(row: Mapping[str, Any]) -> dict:
    """Join-enriched video row -> externally visible video.

    Internal foreign keys (category_id, uploaded_by) never leak; only the
    joined display names do. Missing joins come back as None.
    """
    return {name: row[name] if name in row.keys() else None for name in VIDEO_FIELDS}


def project_category(row: Mapping[str, Any]) -> dict:
    return {name: row[name] for name in CATEGORY_FIELDS}
