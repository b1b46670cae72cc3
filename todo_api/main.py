import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.api import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import AuthenticationError, StoreUnavailableError, TodoAPIError
from .core.logging_config import configure_logging
from .db.session import init_db, open_engine

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, message, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "message": message},
        headers=headers,
    )


def format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        msg = err.get("msg", "Invalid value").replace("Value error, ", "")
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(TodoAPIError)
    async def todo_api_error_handler(request: Request, exc: TodoAPIError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return error_response(exc.status_code, exc.error, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(400, "Validation Error", format_validation_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        error = HTTPStatus(exc.status_code).phrase
        if exc.status_code in (404, 405):
            message = f"Cannot {request.method} {request.url.path}"
        else:
            message = exc.detail
        return error_response(exc.status_code, error, message, getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = "Server Error" if settings.is_production else str(exc) or "Server Error"
        return error_response(500, "Server Error", message)


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = engine
        if store is None:
            try:
                store = open_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
            except StoreUnavailableError as exc:
                logger.critical("%s", exc)
                raise SystemExit(1)

        # Create tables on startup
        init_db(store)
        app.state.engine = store
        yield
        if engine is None:
            store.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Authenticated task planner API",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app, settings)

    # Include API routers
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def read_root():
        return {"success": True, "message": "Todo API is running"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    configure_logging(default_settings.LOG_LEVEL)
    if not default_settings.DATABASE_URL:
        logger.critical("DATABASE_URL is missing")
        sys.exit(1)

    # lifespan="on": a failed store connection stops the server before it binds
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT, lifespan="on")


if __name__ == "__main__":
    run()
