"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.authbridge.api.http.app_data import ApplicationDependencies
from src.authbridge.api.http.routers.health import router as health_router
from src.authbridge.api.http.routers.identity import router as identity_router
from src.authbridge.api.utils.app_startup import configure_logging
from src.authbridge.core.services import DbSessionService
from src.authbridge.runtime.context import get_config

__all__ = ["app", "create_app"]


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the application; ``dependencies`` replaces the default wiring."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "app_dependencies", None) is None:
            app.state.app_dependencies = ApplicationDependencies(
                database_service=DbSessionService()
            )
        config = get_config()
        logger.info(
            "Starting up in {} environment serving namespace {}",
            config.app.environment,
            config.tenancy.namespace_key,
        )
        try:
            yield
        finally:
            logger.info("Shutting down application")

    production = get_config().app.environment == "production"
    app = FastAPI(
        title="authbridge",
        lifespan=lifespan,
        docs_url=None if production else "/docs",
        redoc_url=None if production else "/redoc",
    )
    app.state.app_dependencies = dependencies

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        base_ctx = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }

        start = time.perf_counter()
        with logger.contextualize(**base_ctx):
            try:
                logger.info("request.start")
                response = await call_next(request)

                duration_ms = (time.perf_counter() - start) * 1000
                logger.bind(
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 1),
                ).info("request.end")

                response.headers.setdefault("X-Request-ID", request_id)
                return response

            except Exception as exc:
                duration_ms = (time.perf_counter() - start) * 1000
                logger.bind(
                    status_code=500,
                    duration_ms=round(duration_ms, 1),
                    error_type=type(exc).__name__,
                ).exception("request.error")
                return JSONResponse(
                    status_code=500,
                    content={"detail": "Internal Server Error", "request_id": request_id},
                    headers={"X-Request-ID": request_id},
                )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": getattr(request.state, "request_id", "-"),
            },
            headers=getattr(exc, "headers", None),
        )

    app.include_router(health_router)
    app.include_router(identity_router)
    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    server_config = get_config().app
    uvicorn.run(
        app,
        host=server_config.host,
        port=server_config.port,
        access_log=False,  # request logging happens in middleware
    )
