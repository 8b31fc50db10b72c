"""Tests for catalog/queries.py: listing filters, page window, SQL composition."""

import pytest

from catalog.errors import ValidationError
from catalog.queries import (
    ListingQuery,
    build_count_query,
    build_page_query,
    build_single_query,
)


class TestListingQuery:
    def test_defaults(self):
        q = ListingQuery.from_params(default_limit=25)
        assert (q.category, q.page, q.limit) == (None, 1, 25)
        assert q.offset == 0

    def test_offset(self):
        q = ListingQuery.from_params(page="3", limit="20")
        assert q.offset == 40

    def test_category_trimmed(self):
        assert ListingQuery.from_params(category="  music ").category == "music"

    def test_blank_category_is_no_filter(self):
        assert ListingQuery.from_params(category="  ").category is None

    @pytest.mark.parametrize("page", ["0", "-2", "x"])
    def test_invalid_page(self, page):
        with pytest.raises(ValidationError) as exc:
            ListingQuery.from_params(page=page)
        assert exc.value.field == "page"

    @pytest.mark.parametrize("limit", ["0", "ten"])
    def test_invalid_limit(self, limit):
        with pytest.raises(ValidationError) as exc:
            ListingQuery.from_params(limit=limit)
        assert exc.value.field == "limit"

    def test_offset_beyond_integer_limit(self):
        with pytest.raises(ValidationError) as exc:
            ListingQuery.from_params(page="10000000000", limit="10000000000")
        assert exc.value.field == "page"

    def test_large_page_with_small_limit(self):
        q = ListingQuery.from_params(page="1000000000", limit="10")
        assert q.offset == 9999999990


class TestSqlComposition:
    def test_count_without_filter(self):
        sql, params = build_count_query(ListingQuery())
        assert sql.startswith("SELECT COUNT(*)")
        assert "WHERE" not in sql
        assert params == []

    def test_count_with_filter(self):
        sql, params = build_count_query(ListingQuery(category="music"))
        assert "WHERE c.name = ?" in sql
        assert params == ["music"]

    def test_page_binds_window_last(self):
        sql, params = build_page_query(ListingQuery(category="news", page=2, limit=5))
        assert sql.rstrip().endswith("LIMIT ? OFFSET ?")
        assert params == ["news", 5, 5]

    def test_page_order_has_tiebreaker(self):
        sql, _ = build_page_query(ListingQuery())
        assert "ORDER BY v.created_at DESC, v.id DESC" in sql

    def test_outer_joins(self):
        sql, _ = build_page_query(ListingQuery())
        assert "LEFT JOIN categories" in sql
        assert "LEFT JOIN users" in sql

    def test_category_never_interpolated(self):
        sql, params = build_page_query(ListingQuery(category="x' OR '1'='1"))
        assert "OR '1'='1" not in sql
        assert params[0] == "x' OR '1'='1"

    def test_single(self):
        sql, params = build_single_query(9)
        assert "WHERE v.id = ?" in sql
        assert params == [9]
