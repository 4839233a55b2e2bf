import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import JSONResponse

from members_api.core.config import settings
from members_api.core.db import Database
from members_api.core.errors import MemberStoreError
from members_api.core.logging import configure_logging
from members_api.routers import health, members

logger = logging.getLogger(__name__)

REQUIRED_CREATE_FIELDS = {"name", "email", "join_date"}


def build_database() -> Database:
    return Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_pool_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    database: Database = app.state.database
    database.init_app()
    if database.check_connection():
        logger.info("database connected")
    else:
        logger.error("database unreachable at startup; requests will fail until it recovers")
    yield
    database.dispose()
    logger.info("database pool disposed")


async def member_store_error_handler(request: Request, exc: MemberStoreError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def _is_blank_required(err: dict) -> bool:
    loc = tuple(err.get("loc", ()))
    if not loc or loc[-1] not in REQUIRED_CREATE_FIELDS:
        return False
    value = err.get("input")
    return err.get("type") == "missing" or value is None or (isinstance(value, str) and not value.strip())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.info("rejected %s %s: %s", request.method, request.url.path, errors)
    if any(tuple(err.get("loc", ()))[:1] == ("path",) for err in errors):
        message = "Invalid member ID."
    elif request.method == "POST" and any(_is_blank_required(err) for err in errors):
        message = "Name, email, and join date are required."
    else:
        message = "Invalid member data."
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}" for err in errors
    )
    return JSONResponse(status_code=400, content={"error": message, "details": details})


def create_app(database: Database | None = None) -> FastAPI:
    app = FastAPI(
        title="Gym Members API",
        version="1.0.0",
        description="Member records: list, add, edit and delete gym members.",
        # Served behind a proxy prefix; the docs route below points at the prefixed OpenAPI URL.
        docs_url=None,
        root_path=settings.root_path,
        lifespan=lifespan,
    )
    app.state.database = database or build_database()

    @app.get("/docs", include_in_schema=False)
    def swagger_ui():
        prefix = (settings.root_path or "").rstrip("/")
        openapi_url = f"{prefix}{app.openapi_url}"
        return get_swagger_ui_html(openapi_url=openapi_url, title=f"{app.title} - Docs")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info("%s %s -> %s (%.4fs)", request.method, request.url.path, response.status_code, elapsed)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MemberStoreError, member_store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(health.router)
    app.include_router(members.router)
    return app


app = create_app()


def run() -> None:
    configure_logging()
    uvicorn.run("members_api.main:app", host=settings.host, port=settings.port)
