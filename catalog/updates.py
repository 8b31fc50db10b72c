"""Partial-update composition: a validated VideoUpdate -> column assignments."""

from dataclasses import dataclass, field
from typing import Any

from catalog.validation import VideoUpdate

# Payload field -> videos column. Only these columns can ever be assigned.
FIELD_COLUMNS = {
    "title": "title",
    "description": "description",
    "src": "src",
    "type": "type",
    "poster": "poster",
    "duration": "duration",
    "resolution": "resolution",
    "size": "size",
    "status": "status",
    "category": "category_id",
    "uploaded_by": "uploaded_by",
}


@dataclass
class UpdatePlan:
    """Column assignments for one video, in field order."""
    video_id: int
    assignments: list[tuple[str, Any]] = field(default_factory=list)

    @property
    def columns(self) -> list[str]:
        return [column for column, _ in self.assignments]


def compose_update(video_id: int, update: VideoUpdate, resolver) -> UpdatePlan:
    """Build assignments for exactly the fields the caller supplied.

    A category name goes through the resolver and lands as a category_id.
    """
    plan = UpdatePlan(video_id=video_id)
    for name in update.present_fields():
        value = getattr(update, name)
        if name == "category":
            value = resolver.resolve(value)
            if value is None:
                continue
        plan.assignments.append((FIELD_COLUMNS[name], value))
    return plan
