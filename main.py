"""
Catalog Admin API entry point.

Serves the catalog import pipeline, product catalog, stockholding policy,
warehouses/routes and audit log under /api.
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import engine, Base
from app.routers import api_router
from app import models  # noqa: F401  registers tables on Base.metadata

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.log_format,
)
logger = logging.getLogger(__name__)

# Malformed HTTP requests are noise in the console logs
logging.getLogger("uvicorn.error").setLevel(logging.ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info(f"🚀 {settings.app_name} started ({settings.ENVIRONMENT})")

    yield

    engine.dispose()
    logger.info("🛑 Database connections closed")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Product master imports, catalog maintenance and stockholding policy",
    debug=settings.debug,
    lifespan=lifespan,
)


@app.middleware("http")
async def catch_unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} failed: {str(e)}", exc_info=True)

        content = {"detail": "Invalid request"}
        if settings.debug:
            content = {"detail": str(e), "error_type": type(e).__name__}
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Flatten request-body validation errors into readable messages"""
    error_messages = [
        f"{' -> '.join(str(x) for x in error['loc'])}: {error['msg']} (type: {error['type']})"
        for error in exc.errors()
    ]
    logger.error(f"Validation error on {request.url.path}: {error_messages}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation Error",
            "errors": error_messages,
        }
    )


app.include_router(api_router, prefix="/api")


@app.get("/")
def read_root():
    """Service banner."""
    return {
        "status": "ok",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
def health_check():
    """Liveness probe."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=settings.debug,
    )
