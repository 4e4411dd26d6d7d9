import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from querymanager.api.main import api_router
from querymanager.core.config import settings
from querymanager.engines.query import QueryManager, RenderError, UnknownQuery

_logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load query templates before serving; a load failure aborts startup."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    manager: QueryManager = app.state.query_manager
    if not manager.started:
        manager.start()
    _logger.info("Loaded %d queries", manager.count())
    yield


def create_app(manager: QueryManager | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )
    app.state.query_manager = manager or QueryManager(settings.query_manager_config())

    # -----------------------------------------------------------------------
    # Exception handlers: render errors are caller errors, not server errors
    # -----------------------------------------------------------------------

    @app.exception_handler(UnknownQuery)
    async def unknown_query_handler(request: Request, exc: UnknownQuery) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RenderError)
    async def render_error_handler(request: Request, exc: RenderError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions: log and return 500 with safe message."""
        _logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        detail = "Internal server error"
        if settings.ENVIRONMENT == "local":
            detail = f"Internal server error: {exc}"
        return JSONResponse(status_code=500, content={"detail": detail})

    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
