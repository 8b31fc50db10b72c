"""Category routes."""

import asyncio

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from catalog.service import CatalogService
from web.deps import get_catalog
from web.helpers import read_json_object

router = APIRouter()


@router.get("/categories")
async def list_categories(catalog: CatalogService = Depends(get_catalog)):
    """All categories, name ascending."""
    return JSONResponse(await asyncio.to_thread(catalog.list_categories))


@router.post("/categories")
async def create_category(request: Request, catalog: CatalogService = Depends(get_catalog)):
    body = await read_json_object(request)
    category = await asyncio.to_thread(catalog.create_category, body.get("name"))
    return JSONResponse(category, status_code=201)
