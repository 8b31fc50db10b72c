"""
SQL composition for catalog listings.

Listing runs two independent reads: a COUNT under the filter, and the page
window itself. They are not snapshot-consistent; a row written between the
two reads can make ``total`` disagree with the page contents.
"""

from dataclasses import dataclass
from typing import Any, Optional

from catalog.errors import ValidationError
from catalog.validation import SQLITE_INT_MAX, parse_positive_int

DEFAULT_PAGE_SIZE = 10

# Columns of the join-enriched video row, in projection order
VIDEO_COLUMNS = """
    v.id, v.title, v.description, v.src, v.type, v.poster, v.duration,
    v.resolution, v.size, v.status, v.created_at, v.updated_at,
    c.name AS category_name, u.username AS uploaded_by_username
"""

# Outer joins keep videos with no category or uploader in the result
_FROM = """
    FROM videos v
    LEFT JOIN categories c ON c.id = v.category_id
    LEFT JOIN users u ON u.id = v.uploaded_by
"""

# id breaks ties between rows created in the same second
_ORDER = "ORDER BY v.created_at DESC, v.id DESC"


@dataclass(frozen=True)
class ListingQuery:
    """Filter and page window for a video listing."""
    category: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(cls, category: Optional[str] = None, page: Any = None,
                    limit: Any = None, default_limit: int = DEFAULT_PAGE_SIZE) -> "ListingQuery":
        """Build from raw query-string values. Raises ValidationError on bad page/limit."""
        page_no = parse_positive_int("page", page, default=1)
        page_size = parse_positive_int("limit", limit, default=default_limit)
        if (page_no - 1) * page_size > SQLITE_INT_MAX:
            raise ValidationError("is too large for this limit", field="page")
        category = category.strip() if category else None
        return cls(category=category or None, page=page_no, limit=page_size)


def _where(query: ListingQuery) -> tuple[str, list]:
    if query.category is not None:
        return "WHERE c.name = ?", [query.category]
    return "", []


def build_count_query(query: ListingQuery) -> tuple[str, list]:
    """Total rows matching the filter, ignoring the page window."""
    where, params = _where(query)
    return f"SELECT COUNT(*) {_FROM} {where}", params


def build_page_query(query: ListingQuery) -> tuple[str, list]:
    """One page of enriched rows, newest first."""
    where, params = _where(query)
    sql = f"SELECT {VIDEO_COLUMNS} {_FROM} {where} {_ORDER} LIMIT ? OFFSET ?"
    return sql, params + [query.limit, query.offset]


def build_single_query(video_id: int) -> tuple[str, list]:
    """One enriched row by id."""
    return f"SELECT {VIDEO_COLUMNS} {_FROM} WHERE v.id = ?", [video_id]
