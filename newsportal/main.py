import logging
import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import api_router
from .api.endpoints import preview
from .config import get_settings
from .core.database import SessionLocal, create_tables
from .core.exceptions import ErrorKind, PortalError, RateLimitExceededError
from .services.news_service import validation_errors
from .services.seed import ensure_admin_account, ensure_default_categories


def apply_logging_preferences():
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(message)s"
)

apply_logging_preferences()

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False) if settings.log_format == "json" else structlog.dev.ConsoleRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


def seed_defaults():
    db = SessionLocal()
    try:
        ensure_default_categories(db)
        ensure_admin_account(db, settings)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    apply_logging_preferences()
    logger.info("Starting news portal API", version=__version__)
    try:
        create_tables()
        logger.info("Database tables created/verified")
        if settings.seed_on_startup:
            seed_defaults()
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down news portal API")


class UploadStaticFiles(StaticFiles):
    """Serves the upload root with caching and cross-origin embedding allowed."""

    def __init__(self, *args, max_age: int = 0, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_age = max_age

    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = f"public, max-age={self.max_age}"
        response.headers["Cross-Origin-Resource-Policy"] = "cross-origin"
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error_code=exc.error_code, error=exc.message)
        headers = None
        if isinstance(exc, RateLimitExceededError):
            headers = {"Retry-After": str(exc.retry_after)}
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=ErrorKind.VALIDATION.status_code,
            content={
                "success": False,
                "message": "मान्यकरण त्रुटि",
                "error_code": ErrorKind.VALIDATION.value,
                "errors": validation_errors(exc),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail), "error_code": f"HTTP_{exc.status_code}"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception occurred",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "सर्वर त्रुटि",
                "error_code": ErrorKind.INTERNAL.value,
            },
        )


def create_application() -> FastAPI:
    app = FastAPI(
        title="Purvanchal News",
        description="Hindi news portal API: articles, categories, marquee and social link previews",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount Static Files for Uploads
    os.makedirs(settings.upload_dir, exist_ok=True)
    app.mount(
        settings.upload_url_prefix,
        UploadStaticFiles(directory=settings.upload_dir, max_age=settings.uploads_cache_max_age),
        name="uploads",
    )

    app.include_router(preview.router, tags=["preview"])
    app.include_router(api_router, prefix="/api")

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "newsportal.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="info",
        access_log=False,
    )
