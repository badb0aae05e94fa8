"""Storefront FastAPI application.

Every request runs inside the storefront domain context, so route handlers
can use ``current_domain`` to process commands synchronously.

Usage:
    uvicorn storefront.app:app --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.cart.api import cart_router
from storefront.catalogue.api import category_router, product_router
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.identity.api import auth_router
from storefront.ordering.api import checkout_router, order_router
from storefront.payments.api import webhook_router
from storefront.utils.db import close_connections, configure_database
from storefront.utils.exception_handlers import register_exception_handlers
from storefront.utils.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the domain (and its connection pool) once; dispose of it at shutdown."""
    configure_database(storefront, get_settings().database_url)
    storefront.init()
    logger.info("Storefront started")
    yield
    close_connections(storefront)
    logger.info("Storefront stopped")


def create_app(lifespan=lifespan) -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout and order management",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url.rstrip("/")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and bind request logging context."""
        bind_request_context(method=request.method, path=request.url.path)
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_request_context()

    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(auth_router)
    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(order_router)
    app.include_router(webhook_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app


app = create_app()
