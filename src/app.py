"""Grocery store FastAPI application.

Serves the catalogue, cart and checkout operations over HTTP. Each request
runs inside the grocery domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the domain.toml overlay:
#   - unset / "test" → in-memory provider
#   - "production"   → PostgreSQL provider
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from grocery.domain import grocery  # noqa: E402
from grocery.utils.db import setup_db
from grocery.utils.logging import bind_context, clear_context, configure_logging

configure_logging()
grocery.init()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_db(grocery)
    yield


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Grocery Store API",
    description="Catalogue, shopping carts and checkout",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the grocery domain context and a request-scoped log context."""
    clear_context()
    bind_context(request_id=uuid.uuid4().hex[:12], method=request.method, path=request.url.path)
    with grocery.domain_context():
        return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from grocery.api import cart_router, order_router, product_router, register_error_handlers  # noqa: E402

app.include_router(product_router)
app.include_router(cart_router)
app.include_router(order_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": grocery.name})
