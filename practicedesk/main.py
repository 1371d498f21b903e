# practicedesk/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from practicedesk.core.config import get_settings
from practicedesk.core.errors import AppError, UnauthenticatedError
from practicedesk.core.tokens import get_token_service
from practicedesk.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from practicedesk.models import user as _user_models  # noqa: F401
from practicedesk.models import customer as _customer_models  # noqa: F401
from practicedesk.models import matter as _matter_models  # noqa: F401

# Routers
from practicedesk.routers.auth import router as auth_router
from practicedesk.routers.customers import router as customers_router
from practicedesk.routers.matters import router as matters_router
from practicedesk.routers.matters import status_router as matter_status_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Build the token service (fails fast on bad JWT settings).
      - Verify DB connectivity and create tables.
    """
    get_token_service()
    logger.info("Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error mapping ---


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Domain errors carry their own status code and client-safe message."""
    logger.warning(
        "%s %s -> %s %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.__class__.__name__,
        exc.detail,
    )
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is logged with its traceback and hidden from the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(customers_router, prefix=settings.API_PREFIX)
app.include_router(matters_router, prefix=settings.API_PREFIX)
app.include_router(matter_status_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "practicedesk-backend"}
