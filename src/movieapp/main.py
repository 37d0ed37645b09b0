"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from movieapp.admin.app import setup_admin
from movieapp.api.routes import health, movies, reviews, users
from movieapp.auth import reject_all_tokens
from movieapp.config import settings
from movieapp.database import engine
from movieapp.errors import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Movie app API starting")
    yield
    await engine.dispose()
    logger.info("Database connections closed")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def register_routes(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.include_router(health.router)
    app.include_router(movies.router, prefix="/api", tags=["movies"])
    app.include_router(reviews.router, prefix="/api", tags=["reviews"])
    app.include_router(users.router, prefix="/api", tags=["users"])


def create_app() -> FastAPI:
    app = FastAPI(
        title="Movie App API",
        description="TMDb-backed movie catalogue with user reviews",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.token_verifier = reject_all_tokens

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    setup_admin(app)
    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn on the configured host and port."""
    uvicorn.run("movieapp.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    serve()
