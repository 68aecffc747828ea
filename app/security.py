import json
from typing import Any, Optional

from fastapi import Depends, Header, HTTPException, Request
from pydantic import ValidationError

from .config import Settings, get_settings
from .core import ProductIn, ProductUpdate

INVALID_API_KEY = "Invalid or missing API key"
INVALID_PRODUCT = "Invalid product data"


def require_api_key(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Single shared secret, exact match. Runs before any other dependency of a
    product route, so nothing downstream sees an unauthenticated request.
    """
    if not x_api_key or x_api_key != settings.api_key:
        raise HTTPException(status_code=401, detail=INVALID_API_KEY)


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail=INVALID_PRODUCT)


async def validate_product(request: Request) -> ProductIn:
    body = await _read_json_body(request)
    try:
        return ProductIn.model_validate(body)
    except ValidationError:
        raise HTTPException(status_code=400, detail=INVALID_PRODUCT)


async def validate_product_update(request: Request) -> ProductUpdate:
    # same type rules as create, but any subset of fields may be sent
    body = await _read_json_body(request)
    try:
        return ProductUpdate.model_validate(body)
    except ValidationError:
        raise HTTPException(status_code=400, detail=INVALID_PRODUCT)
