"""FastAPI dependency providers: read from app.state, set by create_app()."""

from fastapi import Request

from catalog.service import CatalogService


def get_video_store(request: Request):
    """VideoStore instance."""
    return request.app.state.video_store


def get_catalog(request: Request) -> CatalogService:
    """CatalogService bound to the app's store."""
    return request.app.state.catalog


def get_web_config(request: Request):
    """WebConfig instance."""
    return request.app.state.web_config
