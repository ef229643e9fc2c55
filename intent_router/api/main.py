"""FastAPI application for the intent router."""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from intent_router import __version__
from intent_router.api.endpoints import router
from intent_router.config import Settings
from intent_router.logging_config import configure_logging

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Intent Router",
    description="Routes trading intents into verifiable execution plans",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - ROUTER_HOST: Host to bind to (default: 0.0.0.0)
    - ROUTER_PORT: Port to bind to (default: 8000)
    - ROUTER_DEBUG: Enable debug/reload mode (default: false)
    - LOG_LEVEL: Log level (default: INFO)
    """
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(
        "intent_router.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
