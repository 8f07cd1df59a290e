"""FastAPI application for the team roster."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from team_roster.api.router import get_api_router
from team_roster.core.config import settings
from team_roster.core.database import close_db, init_db
from team_roster.core.exceptions import RosterError
from team_roster.core.logging import setup_logging
from team_roster.schemas.shared import ApiResponse, ValidationErrorDetail, ValidationErrorResponse
from team_roster.utils.messages import get_message

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await init_db()
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")
    yield
    await close_db()


async def roster_error_handler(request: Request, exc: RosterError) -> JSONResponse:
    """Render roster errors in the response envelope."""
    body = ApiResponse(success=False, message=exc.detail, code=exc.code)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render framework HTTP errors (auth, routing) in the response envelope."""
    body = ApiResponse(success=False, message=str(exc.detail), code=f"HTTP{exc.status_code}")
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are ValidationErrors with per-field details."""
    details = [
        ValidationErrorDetail(
            field=".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            message=error.get("msg", ""),
            type=error.get("type", ""),
        )
        for error in exc.errors()
    ]
    first = details[0].message if details else ""
    body = ValidationErrorResponse(
        message=get_message("validation", "invalid_data", detail=first),
        code="ValidationError",
        data=details,
    )
    return JSONResponse(status_code=400, content=jsonable_encoder(body))


def create_app() -> FastAPI:
    """Build the application with routes, CORS and error envelopes."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS_LIST,
        allow_credentials=True,
        allow_methods=settings.CORS_METHODS_LIST,
        allow_headers=settings.CORS_HEADERS_LIST,
    )

    app.add_exception_handler(RosterError, roster_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(get_api_router(), prefix=settings.API_V1_STR)
    app.mount(
        settings.STATIC_URL_PREFIX,
        StaticFiles(directory=settings.UPLOADS_PATH, check_dir=False),
        name="uploads",
    )
    return app


app = create_app()
