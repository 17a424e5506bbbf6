"""
FastAPI application entry point.

``create_app`` wires settings, logging, the product store, middleware,
routes and exception handlers together. ``app`` is the instance ASGI
servers import; ``serve`` runs it with uvicorn.

Run with: uvicorn productapi.main:app --reload
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import ProductStore
from .errors import ProductAPIError
from .logging_config import get_logger, setup_logging
from .middleware import RequestLogMiddleware
from .routes import router as products_router

logger = get_logger(__name__)


# ---------------------------
# Exception handlers
# ---------------------------
async def product_error_handler(request: Request, exc: ProductAPIError):
    logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.method} {request.url.path}: invalid request body: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(f"{request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """
    Build a configured application.

    Args:
        settings: Defaults to ``get_settings()``
        store: Product store to serve; defaults to a freshly seeded one

    Returns:
        FastAPI application with the product routes mounted
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} in {settings.app_env} mode on port {settings.port}")
        logger.info(f"Loaded {len(app.state.store)} products")
        if settings.api_key:
            logger.info("API key configured (not enforced)")
        yield
        logger.info(f"Shutting down {settings.app_name}")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore.seeded()

    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ProductAPIError, product_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello world."

    app.include_router(products_router)
    return app


app = create_app()


def serve() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("productapi.main:app", host=settings.host, port=settings.port,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
