# 📄 File: authhub/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the account service, connects all of its parts together and
# makes sure everything that reacts to events is listening before the first request comes in.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: logging setup, container construction, lifespan
# (schema creation, expired token purge, subscriber bootstrap and bus seal on startup; bus drain
# and connection cleanup on shutdown), request-id middleware, CORS, router registration and
# exception handlers.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - authhub.shared.config.settings, authhub.shared.utils.logging
# - authhub.shared.core.dependencies (Container)
# - authhub.api.v1.router
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (`authhub` console script)
# - Tests (create_application with an injected container)

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from authhub.api.v1.router import api_v1_router
from authhub.shared.config.settings import Settings, get_settings
from authhub.shared.core.dependencies import Container
from authhub.shared.core.exceptions import AuthHubException
from authhub.shared.utils.logging import log_context, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Subscribers are bootstrapped and the event bus sealed before the
    application starts serving; in-flight event handlers are drained on
    shutdown.
    """
    container: Container = app.state.container
    logger.info(f"🔐 {container.settings.APP_NAME} starting up...")

    try:
        await container.startup()
        logger.info(f"✅ Event bus ready: {container.event_bus.get_stats()['subscription_count']} subscriptions")
        logger.info("✅ Startup complete")

        yield  # Application is running

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    finally:
        logger.info("🔄 Shutting down...")
        try:
            await container.shutdown()
            logger.info("✅ Shutdown complete")
        except Exception as e:
            logger.error(f"❌ Shutdown error: {e}", exc_info=True)


def create_application(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Settings to use; defaults to get_settings()
        container: Pre-built container (tests inject one with fake collaborators)

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.container = container or Container(settings)

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID")
        with log_context(request_id=request_id) as context:
            request.state.request_id = context["request_id"]
            response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request.state.request_id
        return response

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(AuthHubException)
    async def authhub_exception_handler(request: Request, exc: AuthHubException) -> JSONResponse:
        """Handle service exceptions raised outside of an operation."""
        content = exc.to_dict()
        content["error"]["timestamp"] = datetime.now(timezone.utc).isoformat()
        content["error"]["request_id"] = getattr(request.state, "request_id", None)
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(Exception)
    async def internal_server_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle 500 Internal Server Error."""
        logger.error(f"Internal server error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "message": "An internal server error occurred",
                    "details": {"error_type": type(exc).__name__} if settings.DEBUG else {},
                    "request_id": getattr(request.state, "request_id", None),
                }
            },
        )

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": f"{settings.API_V1_PREFIX}/health",
            "api_base": settings.API_V1_PREFIX,
        }

    return app


def main():
    """
    Run the application with uvicorn.

    Used by the ``authhub`` console script and ``python -m authhub.main``.
    """
    settings = get_settings()
    uvicorn.run(
        "authhub.main:create_application",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
