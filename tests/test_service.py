"""Tests for catalog/service.py: create/list/update/delete flows against a real store."""

import pytest
from unittest.mock import MagicMock

from catalog.errors import NotFound, StorageError, ValidationError
from catalog.service import CatalogService


def _payload(**overrides):
    payload = {"title": "T", "src": "https://x/y.mp4", "type": "video/mp4"}
    payload.update(overrides)
    return payload


class TestCreate:
    def test_projection_matches_input(self, catalog, video_store):
        uid = video_store.create_user("carol")
        payload = _payload(
            description="a clip", poster="https://x/p.jpg", duration="00:03:30",
            resolution="1080p", size=2048, status="inactive", category="music",
            uploaded_by=uid,
        )
        video = catalog.create_video(payload)
        for key in ("title", "description", "src", "type", "poster", "duration",
                    "resolution", "size", "status"):
            assert video[key] == payload[key]
        assert video["category_name"] == "music"
        assert video["uploaded_by_username"] == "carol"
        assert "category_id" not in video

    def test_category_reused(self, catalog):
        catalog.create_video(_payload(category="music"))
        catalog.create_video(_payload(title="U", category="music"))
        assert [c["name"] for c in catalog.list_categories()] == ["music"]

    def test_defaults(self, catalog):
        video = catalog.create_video(_payload())
        assert video["status"] == "active"
        assert video["category_name"] is None

    def test_invalid_never_reaches_store(self):
        store = MagicMock()
        with pytest.raises(ValidationError):
            CatalogService(store).create_video({"title": "T"})
        store.insert_video.assert_not_called()
        store.find_category.assert_not_called()


class TestList:
    def test_page_shape(self, catalog):
        for i in range(3):
            catalog.create_video(_payload(title=f"v{i}"))
        page = catalog.list_videos(page="1", limit="1")
        assert (page.total, page.page, page.limit) == (3, 1, 1)
        items = list(page.items)
        assert [v["title"] for v in items] == ["v2"]

    def test_default_limit(self, video_store):
        service = CatalogService(video_store, default_page_size=2)
        for i in range(3):
            service.create_video(_payload(title=f"v{i}"))
        page = service.list_videos()
        assert page.limit == 2
        assert len(list(page.items)) == 2

    def test_filter(self, catalog):
        catalog.create_video(_payload(title="a", category="music"))
        catalog.create_video(_payload(title="b", category="news"))
        page = catalog.list_videos(category="news")
        assert page.total == 1
        assert [v["title"] for v in page.items] == ["b"]

    def test_invalid_page(self, catalog):
        with pytest.raises(ValidationError):
            catalog.list_videos(page="0")


class TestUpdate:
    def test_partial_update(self, catalog):
        created = catalog.create_video(_payload(description="keep me"))
        updated = catalog.update_video(created["id"], {"status": "archived"})
        assert updated["status"] == "archived"
        assert updated["title"] == created["title"]
        assert updated["src"] == created["src"]
        assert updated["description"] == "keep me"

    def test_update_category_creates_it(self, catalog):
        created = catalog.create_video(_payload())
        updated = catalog.update_video(str(created["id"]), {"category": "docs"})
        assert updated["category_name"] == "docs"

    def test_null_does_not_clear(self, catalog):
        created = catalog.create_video(_payload(description="d"))
        updated = catalog.update_video(created["id"], {"description": None, "title": "New"})
        assert updated["description"] == "d"
        assert updated["title"] == "New"

    def test_no_fields_never_reaches_store(self):
        store = MagicMock()
        with pytest.raises(ValidationError, match="no fields to update"):
            CatalogService(store).update_video(1, {})
        store.update_video.assert_not_called()

    def test_missing_video(self, catalog):
        with pytest.raises(NotFound):
            catalog.update_video(999, {"title": "x"})

    def test_invalid_id(self, catalog):
        with pytest.raises(ValidationError) as exc:
            catalog.update_video("abc", {"title": "x"})
        assert exc.value.field == "id"


class TestDelete:
    def test_delete(self, catalog):
        created = catalog.create_video(_payload())
        catalog.delete_video(created["id"])
        with pytest.raises(NotFound):
            catalog.get_video(created["id"])

    def test_delete_missing_is_not_found(self, catalog):
        with pytest.raises(NotFound):
            catalog.delete_video(12345)

    def test_storage_failure_surfaces(self):
        store = MagicMock()
        store.delete_video.side_effect = StorageError("database is locked")
        with pytest.raises(StorageError):
            CatalogService(store).delete_video(1)
        assert store.delete_video.call_count == 1


class TestCategories:
    def test_create_and_list(self, catalog):
        catalog.create_category("b")
        catalog.create_category("a")
        assert [c["name"] for c in catalog.list_categories()] == ["a", "b"]
