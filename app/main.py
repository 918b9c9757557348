import uuid

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.errors import error_detail
from app.api.routes.admin_questions import router as admin_questions_router
from app.api.routes.answers import router as answers_router
from app.api.routes.categories import router as categories_router
from app.api.routes.health import router as health_router
from app.api.routes.leaderboard import router as leaderboard_router
from app.api.routes.progress import router as progress_router
from app.api.routes.questions import router as questions_router
from app.api.routes.users import router as users_router
from app.core.config import get_settings
from app.core.logging import bind_request_context, configure_logging

logger = structlog.get_logger(__name__)


async def _store_failure_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "quiz_store_failure",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": error_detail("E_STORE_UNAVAILABLE", "Database temporarily unavailable")},
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first_error = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first_error.get("loc", ()) if part != "body")
    message = first_error.get("msg", "Invalid request")
    return JSONResponse(
        status_code=422,
        content={"detail": error_detail("E_VALIDATION", f"{location}: {message}" if location else message)},
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("quiz_unhandled_error", method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": error_detail("E_INTERNAL", "Internal server error")},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Cyber Quiz API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        bind_request_context(
            request_id=request.headers.get("X-Request-ID") or uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        return await call_next(request)

    app.add_exception_handler(SQLAlchemyError, _store_failure_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(categories_router)
    app.include_router(questions_router)
    app.include_router(answers_router)
    app.include_router(progress_router)
    app.include_router(leaderboard_router)
    app.include_router(admin_questions_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
