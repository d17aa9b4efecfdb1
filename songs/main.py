from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException
from songs.config import settings
from songs.database import init_db, close_db
from songs.errors import (
    PaginationLinkError,
    RESP_DB_DATA_ACCESS_FAILURE,
    RESP_INTERNAL_ERROR,
    RESP_LINK_BUILD_FAILURE,
)
from songs.middleware import (
    RequestIDMiddleware,
    RequestLogMiddleware,
    get_request_id,
)
from songs.web.song_routes import router as song_router
from contextlib import asynccontextmanager
from pathlib import Path

import logging

_handlers: list[logging.Handler] = [logging.StreamHandler()]
if settings.LOG_DIR:
    _log_dir = Path(settings.LOG_DIR)
    _log_dir.mkdir(parents=True, exist_ok=True)
    _handlers.append(logging.FileHandler(_log_dir / "songs.log"))

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown events"""
    logger.info("[>>] Starting %s...", settings.APP_NAME)
    if settings.DB_AUTO_MIGRATE:
        init_db()
        logger.info("[OK] Database initialized")
    yield
    logger.info("[<<] Shutting down %s...", settings.APP_NAME)
    close_db()
    logger.info("[OK] Database connections closed")


app = FastAPI(
    title=settings.APP_NAME,
    description="CRUD service for a songs library with paginated lyrics",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        {"error": exc.detail}, status_code=exc.status_code, headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report every invalid field as 'location: message'."""
    errors = [
        f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}"
        for error in exc.errors()
    ]
    logger.debug("[%s] Validation errors: %s", get_request_id(request), errors)
    return JSONResponse({"errors": errors}, status_code=422)


@app.exception_handler(PaginationLinkError)
async def pagination_link_exception_handler(
    request: Request, exc: PaginationLinkError
):
    logger.error("[%s] %s", get_request_id(request), exc, exc_info=True)
    return JSONResponse({"error": RESP_LINK_BUILD_FAILURE}, status_code=500)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "[%s] Database failure on %s %s: %s",
        get_request_id(request),
        request.method,
        request.url.path,
        str(exc),
        exc_info=True,
    )
    return JSONResponse({"error": RESP_DB_DATA_ACCESS_FAILURE}, status_code=500)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log every unhandled exception"""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True,
    )
    return JSONResponse({"error": RESP_INTERNAL_ERROR}, status_code=500)


# Request logging runs inside the request ID middleware (added first = innermost)
app.add_middleware(RequestLogMiddleware)
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


app.include_router(song_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
