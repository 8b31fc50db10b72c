"""Liveness check that round-trips the store."""

import asyncio

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from web.deps import get_video_store

router = APIRouter()


@router.get("/health")
async def health(store=Depends(get_video_store)):
    await asyncio.to_thread(store.ping)
    return JSONResponse({"status": "ok"})
