import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from .api import applications as applications_api
from .api import articles as articles_api
from .api import auth as auth_api
from .api import files as files_api
from .api import jobs as jobs_api
from . import database
from .database import init_db
from .utils.error_handlers import AppError, create_error_response, get_error_message

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTPException with user-friendly messages."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "status_code": exc.status_code,
        },
        headers=getattr(exc, "headers", None),
    )


async def app_error_handler(request: Request, exc: AppError):
    """Validation, business-rule and not-found errors raised by the services."""
    if exc.status_code >= 500:
        logger.error("AppError %s: %s", exc.status_code, exc.message)
    return create_error_response(exc.status_code, exc.message, exc.details or None)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and params -> 400."""
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return create_error_response(
        400,
        get_error_message("validation_error"),
        {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]},
    )


async def sqlalchemy_operational_error_handler(request: Request, exc: OperationalError):
    """Handle database operational errors."""
    logger.exception("Database OperationalError: %s", exc)
    return JSONResponse(
        status_code=503,
        content={
            "success": False,
            "error": get_error_message("database_error"),
        },
    )


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    """Handle general database errors."""
    logger.exception("Database SQLAlchemyError: %s", exc)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": get_error_message("database_error"),
        },
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors globally."""
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": get_error_message("server_error"),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(OperationalError, sqlalchemy_operational_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)


def include_routers(app: FastAPI) -> None:
    app.include_router(auth_api.router)
    app.include_router(jobs_api.router)
    app.include_router(files_api.router)
    app.include_router(applications_api.router)
    app.include_router(articles_api.router)


app = FastAPI(title="Careers Backend")
include_routers(app)
register_exception_handlers(app)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "Backend running",
        "service": "Careers Backend"
    }


@app.get("/db/health")
def db_health():
    if getattr(app.state, "db_init_error", None):
        raise HTTPException(
            status_code=503,
            detail=f"DB init failed: {app.state.db_init_error}",
        )

    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("DB health check failed: %s", e)
        raise HTTPException(
            status_code=503,
            detail=get_error_message("database_error"),
        )

    return {"status": "ok"}


_default_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
_extra_origins = [
    origin.strip()
    for origin in os.getenv("FRONTEND_ORIGINS", "").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=[*_default_origins, *_extra_origins],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    try:
        init_db()
        app.state.db_init_error = None
    except Exception as e:
        logger.exception("Database init failed: %s", e)
        app.state.db_init_error = str(e)
