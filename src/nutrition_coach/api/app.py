"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nutrition_coach.api.inventory import router as inventory_router
from nutrition_coach.api.meal_plans import router as meal_plans_router
from nutrition_coach.api.nutrition import router as nutrition_router
from nutrition_coach.api.schemas import error_envelope
from nutrition_coach.app_logging import configure_logging
from nutrition_coach.containers import AppContainer
from nutrition_coach.domain.errors import DomainError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(nutrition_router)
    app.include_router(inventory_router)
    app.include_router(meal_plans_router)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                "Request failed: %s %s: %s", request.method, request.url.path, exc
            )
        return JSONResponse(
            status_code=exc.status_code, content=error_envelope(exc.message)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code, content=error_envelope(str(exc.detail))
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}"
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_envelope("; ".join(messages) or "Invalid request"),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error: %s %s", request.method, request.url.path)
        state_container: AppContainer = request.app.state.container
        await state_container.error_reporter.report(
            "Unhandled API error",
            {
                "path": request.url.path,
                "method": request.method,
                "error": f"{type(exc).__name__}: {exc}",
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope("Internal server error"),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
