"""FastAPI application main module.

This module defines the main FastAPI application instance and core API
endpoints for the LocalLens service. It provides health check and metrics
endpoints, turns LocalLens errors into JSON responses, and serves as the
entry point for the API server.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from locallens import __version__
from locallens.api.exceptions import LocalLensException
from locallens.api.logging_config import RequestLoggingMiddleware, setup_logging
from locallens.api.metrics import metrics_service
from locallens.api.routes import search, shops
from locallens.config import get_settings

setup_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

# Create FastAPI application instance
app = FastAPI(
    title="LocalLens API",
    description="Find products you photographed in shops near you",
    version=__version__,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(shops.router)
app.include_router(search.router)


@app.exception_handler(LocalLensException)
async def locallens_exception_handler(
    request: Request, exc: LocalLensException
) -> JSONResponse:
    """Return LocalLens errors as JSON with the exception's status code."""
    logger.warning(
        exc.message,
        extra={
            "path": str(request.url.path),
            "status_code": exc.status_code,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )


@app.get("/ping")
def ping() -> Dict[str, str]:
    """Health check endpoint.

    Returns:
        Dictionary with status key set to "ok".

    Example:
        >>> response = client.get("/ping")
        >>> assert response.json() == {"status": "ok"}
    """
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Dict[str, Any]:
    """Return description-call and search counters."""
    return metrics_service.get_metrics()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "locallens.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
