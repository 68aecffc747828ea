# app/main.py
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .core import ProductIn, ProductUpdate
from .database import ProductStore
from .logging_config import get_logger, setup_logging
from .models import Message, Product, ProductPage, ProductStats
from .sdk import (
    list_products_logic, product_stats_logic, get_product_logic,
    create_product_logic, update_product_logic, delete_product_logic
)
from .security import require_api_key, validate_product, validate_product_update

logger = get_logger("http")

INTERNAL_ERROR = "Internal server error"


def get_store(request: Request) -> ProductStore:
    return request.app.state.store

# ---------------------------
# Product endpoints (all behind the API key)
# ---------------------------
router = APIRouter(prefix="/api/products", dependencies=[Depends(require_api_key)])

@router.get("", response_model=ProductPage)
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    return await list_products_logic(
        store, category=category, search=search, page=page, limit=limit,
        default_page=settings.default_page, default_limit=settings.default_limit,
    )

@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await get_product_logic(store, product_id)

@router.get("/stats", response_model=ProductStats)
async def product_stats(store: ProductStore = Depends(get_store)):
    return await product_stats_logic(store)

@router.post("", response_model=Product, status_code=201)
async def create_product(
    payload: ProductIn = Depends(validate_product),
    store: ProductStore = Depends(get_store),
):
    return await create_product_logic(store, payload)

@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    payload: ProductUpdate = Depends(validate_product_update),
    store: ProductStore = Depends(get_store),
):
    return await update_product_logic(store, product_id, payload)

@router.delete("/{product_id}", response_model=Message)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await delete_product_logic(store, product_id)


def _static_routes_first(r: APIRouter) -> None:
    """
    "/stats" and "/{product_id}" share a prefix. Fixed paths must be tried
    before parameterized ones or "stats" is looked up as a product id.
    The sort is stable, so declaration order holds within each group.
    """
    r.routes.sort(key=lambda route: "{" in getattr(route, "path", ""))

_static_routes_first(router)

# ---------------------------
# App factory
# ---------------------------
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

def create_app(store: Optional[ProductStore] = None) -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="api-store (in-memory products)")
    app.state.store = store if store is not None else ProductStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # registered first so it sits inside the request logger
    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        logger.info("[%s] %s %s", stamp, request.method, path)
        return await call_next(request)

    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello World"

    app.include_router(router)
    return app


app = create_app()
