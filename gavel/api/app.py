"""
Gavel - FastAPI Application
===========================

FastAPI application factory and configuration.

Author: Gavel contributors
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gavel.core.logger import logger
from gavel.api.config import APIConfig, get_api_config
from gavel.api.dependencies import set_appeal_service
from gavel.api.errors import APIError, ErrorCode, error_response
from gavel.api.routers import appeals_router, auth_router, health_router
from gavel.api.services.auth import init_auth_service

if TYPE_CHECKING:
    from gavel.services.appeals import AppealService


# =============================================================================
# OpenAPI Documentation
# =============================================================================

API_DESCRIPTION = """
## Gavel Appeal API

Submit and track appeals against mutes and bans.

### Authentication

All `/api` endpoints require a JWT issued after Discord login:
```
Authorization: Bearer <access_token>
```

### Error Responses

```json
{
    "success": false,
    "error_code": "APPEAL_PENDING_EXISTS",
    "message": "You already have a pending appeal."
}
```
"""

OPENAPI_TAGS = [
    {"name": "Health", "description": "Health check endpoint"},
    {"name": "Auth", "description": "Identity of the logged-in user"},
    {"name": "Appeals", "description": "Appeal submission and listing"},
]


# =============================================================================
# Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log API startup and shutdown."""
    logger.tree("API Starting", [
        ("Version", app.version),
    ], emoji="🚀")

    yield

    logger.tree("API Stopping", [], emoji="🛑")


# =============================================================================
# Application Factory
# =============================================================================

def create_app(
    appeal_service: Optional["AppealService"] = None,
    config: Optional[APIConfig] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        appeal_service: Service the appeal endpoints delegate to.
        config: API settings, loaded from the environment if omitted.

    Returns:
        Configured FastAPI application
    """
    config = config or get_api_config()

    app = FastAPI(
        title="Gavel API",
        description=API_DESCRIPTION,
        version="1.0.0",
        docs_url="/api/docs" if config.debug else None,
        redoc_url="/api/redoc" if config.debug else None,
        openapi_url="/api/openapi.json" if config.debug else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    init_auth_service(config)
    if appeal_service is not None:
        set_appeal_service(appeal_service)

    # ==========================================================================
    # Middleware
    # ==========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==========================================================================
    # Exception Handlers
    # ==========================================================================

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Return the error body at the top level instead of under "detail"."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies are client errors (400), like missing fields."""
        logger.debug("Request Validation Failed", [
            ("Path", str(request.url.path)[:50]),
            ("Errors", str(len(exc.errors()))),
        ])
        return error_response(ErrorCode.VALIDATION_INVALID_FORMAT)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions with consistent error format."""
        logger.error("Unhandled API Error", [
            ("Path", str(request.url.path)[:50]),
            ("Method", request.method),
            ("Error Type", type(exc).__name__),
            ("Error", str(exc)[:100]),
        ])
        return error_response(ErrorCode.SERVER_ERROR)

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(auth_router, prefix="/api")
    app.include_router(appeals_router, prefix="/api")

    # Root health check (for load balancers)
    app.include_router(health_router)

    return app


__all__ = ["create_app"]
