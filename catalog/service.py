"""
Catalog operations: validate, resolve categories, hit the store, project.

Stateless between calls. Every method borrows pooled connections only for
the duration of its own store calls and never retries a failed one.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Optional

from catalog.categories import CategoryResolver
from catalog.errors import NotFound
from catalog.projection import project_category, project_video
from catalog.queries import DEFAULT_PAGE_SIZE, ListingQuery
from catalog.updates import compose_update
from catalog.validation import parse_positive_int, validate_create, validate_update

logger = logging.getLogger(__name__)


@dataclass
class VideoPage:
    """One page of a listing. ``items`` is a one-shot iterator of projections."""
    total: int
    page: int
    limit: int
    items: Iterator[dict]


def parse_video_id(raw: Any) -> int:
    """Path id -> int. Raises ValidationError for anything but a positive integer."""
    return parse_positive_int("id", raw)


class CatalogService:
    """Video catalog operations over a VideoStore."""

    def __init__(self, store, default_page_size: int = DEFAULT_PAGE_SIZE):
        self.store = store
        self.resolver = CategoryResolver(store)
        self.default_page_size = default_page_size

    # --- Videos ---

    def list_videos(self, category: Optional[str] = None, page: Any = None,
                    limit: Any = None) -> VideoPage:
        """Filtered, paginated listing. Count and page are separate reads."""
        query = ListingQuery.from_params(category, page, limit,
                                         default_limit=self.default_page_size)
        total = self.store.count_videos(query)
        rows = self.store.list_videos(query)
        return VideoPage(
            total=total,
            page=query.page,
            limit=query.limit,
            items=(project_video(row) for row in rows),
        )

    def get_video(self, video_id: Any) -> dict:
        video_id = parse_video_id(video_id)
        row = self.store.get_video(video_id)
        if row is None:
            raise NotFound(f"video {video_id} not found")
        return project_video(row)

    def create_video(self, payload: Any) -> dict:
        """Validate and insert a video, creating its category if unseen."""
        video = validate_create(payload)
        fields = video.model_dump(exclude={"category"}, exclude_none=True)
        category_id = self.resolver.resolve(video.category)
        if category_id is not None:
            fields["category_id"] = category_id
        video_id = self.store.insert_video(fields)
        logger.info("Created video %s (%r)", video_id, video.title)
        return self.get_video(video_id)

    def update_video(self, video_id: Any, payload: Any) -> dict:
        """Apply a partial update. Fields not supplied are left untouched."""
        video_id = parse_video_id(video_id)
        update = validate_update(payload)
        plan = compose_update(video_id, update, self.resolver)
        if self.store.update_video(plan.video_id, plan.assignments) == 0:
            raise NotFound(f"video {video_id} not found")
        logger.info("Updated video %s (%s)", video_id, ", ".join(plan.columns))
        return self.get_video(video_id)

    def delete_video(self, video_id: Any) -> None:
        video_id = parse_video_id(video_id)
        if not self.store.delete_video(video_id):
            raise NotFound(f"video {video_id} not found")
        logger.info("Deleted video %s", video_id)

    # --- Categories ---

    def list_categories(self) -> list[dict]:
        return [project_category(row) for row in self.store.get_categories()]

    def create_category(self, name: Any) -> dict:
        return self.resolver.create(name)
