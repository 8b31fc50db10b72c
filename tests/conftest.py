"""Shared pytest fixtures for video catalog tests."""

import pytest

from catalog.service import CatalogService
from config import Config, WebConfig, DatabaseConfig, CatalogConfig
from data.video_store import VideoStore


@pytest.fixture
def video_store(tmp_path):
    """VideoStore backed by a temp-dir SQLite file (WAL needs a real file, not :memory:)."""
    db = tmp_path / "test.db"
    store = VideoStore(db_path=str(db), pool_size=4, pool_timeout=2.0)
    yield store
    store.close()


@pytest.fixture
def catalog(video_store):
    """CatalogService over the test VideoStore."""
    return CatalogService(video_store, default_page_size=10)


@pytest.fixture
def sample_config(tmp_path):
    """Minimal Config with safe defaults for testing."""
    return Config(
        web=WebConfig(host="127.0.0.1", port=9999),
        database=DatabaseConfig(path=str(tmp_path / "test.db"), pool_size=2),
        catalog=CatalogConfig(default_page_size=5),
    )


@pytest.fixture
def config_yaml(tmp_path):
    """Write a minimal config.yaml and return its path."""
    cfg = tmp_path / "config.yaml"
    cfg.write_text("""\
web:
  host: 127.0.0.1
  port: 8081
  api_prefix: /v1/
  cors_origins: "http://localhost:5173, http://example.com"
database:
  path: "{db_path}"
  pool_size: 3
  pool_timeout: 5
catalog:
  default_page_size: 20
""".format(db_path=str(tmp_path / "cfg_test.db")))
    return cfg
