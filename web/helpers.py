"""Request helpers shared by the API routers."""

import json

from fastapi import Request

from catalog.errors import ValidationError


async def read_json_object(request: Request) -> dict:
    """Parse the request body as a JSON object or raise ValidationError."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("invalid json") from None
    if not isinstance(body, dict):
        raise ValidationError("invalid json")
    return body
