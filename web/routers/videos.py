"""Video catalog routes: list, fetch, create, update, delete."""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from catalog.service import CatalogService
from web.deps import get_catalog
from web.helpers import read_json_object

router = APIRouter()


@router.get("/videos")
async def list_videos(
    category: Optional[str] = Query(None, max_length=255),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    catalog: CatalogService = Depends(get_catalog),
):
    """Paginated listing, newest first, optionally filtered by category name."""
    result = await asyncio.to_thread(catalog.list_videos, category, page, limit)
    return JSONResponse({
        "total": result.total,
        "page": result.page,
        "limit": result.limit,
        "videos": list(result.items),
    })


@router.get("/videos/{video_id}")
async def get_video(video_id: str, catalog: CatalogService = Depends(get_catalog)):
    video = await asyncio.to_thread(catalog.get_video, video_id)
    return JSONResponse(video)


@router.post("/videos")
async def create_video(request: Request, catalog: CatalogService = Depends(get_catalog)):
    payload = await read_json_object(request)
    video = await asyncio.to_thread(catalog.create_video, payload)
    return JSONResponse(video, status_code=201)


@router.put("/videos/{video_id}")
async def update_video(video_id: str, request: Request,
                       catalog: CatalogService = Depends(get_catalog)):
    """Partial update: only the supplied fields change."""
    payload = await read_json_object(request)
    video = await asyncio.to_thread(catalog.update_video, video_id, payload)
    return JSONResponse(video)


@router.delete("/videos/{video_id}")
async def delete_video(video_id: str, catalog: CatalogService = Depends(get_catalog)):
    await asyncio.to_thread(catalog.delete_video, video_id)
    return JSONResponse({"message": "Video deleted"})
