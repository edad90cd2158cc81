"""
# Freet Social API

FastAPI application serving the social relationship endpoints of Freet.

## Application Lifecycle

`lifespan()` connects to MongoDB and verifies indexes before the first request
is served, and closes the client pool on shutdown. A failed connection aborts
startup.

## Middleware

- **SessionMiddleware**: signed session cookie carrying the logged-in username.
- **CORSMiddleware**: origins from `settings.CORS_ORIGINS`.

## Routers

| Prefix | Router |
|---|---|
| `/api/contactInformationDisplay` | contact information displays |
| `/api/followers` | follower views |
| `/api/groupTagging` | groups and group tags |

Plus `GET /health` and the Prometheus `GET /metrics`.

## Errors

Every `FreetError` raised by a validation pipeline or service is rendered as
`{"error": detail}` with the error's status code.

## Running

```bash
uvicorn freet_social.main:app --reload --host 0.0.0.0 --port 8000
```
"""

from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.middleware.sessions import SessionMiddleware
import uvicorn

from freet_social import __version__
from freet_social.config import settings
from freet_social.database import db_manager
from freet_social.errors import FreetError, ValidationError
from freet_social.managers.logging_manager import get_logger
from freet_social.routes import contact_information_display_router, followers_router, group_tagging_router
from freet_social.validation.pipeline import flatten_errors

logger = get_logger(prefix="[Freet Social]")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Connect to MongoDB and create indexes on startup; disconnect on shutdown.

    Raises:
        Exception: If the database cannot be reached after all retries.
    """
    startup_start_time = time.time()
    logger.info(
        "Starting Freet Social API %s (%s)",
        __version__,
        "production" if settings.is_production else "development",
    )

    try:
        await db_manager.connect()
        await db_manager.create_indexes()
    except Exception as e:
        logger.error("Startup failed: %s", e)
        raise

    logger.info("Startup completed in %.3fs", time.time() - startup_start_time)
    yield

    logger.info("Shutting down Freet Social API...")
    await db_manager.disconnect()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Freet Social API",
    description="Follower views, group tagging and contact information displays for Freet.",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(FreetError)
async def freet_error_handler(request: Request, exc: FreetError):
    logger.debug("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed or non-object bodies are 400s in the same `{"error": ...}` shape."""
    error = ValidationError(flatten_errors(exc.errors()))
    logger.info("%s %s rejected before validation: %s", request.method, request.url.path, error.detail)
    return JSONResponse(status_code=error.status_code, content=error.to_body())


if settings.CORS_ENABLED:
    logger.info("Configuring CORS with origins: %s", settings.cors_origins_list)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY.get_secret_value(),
    session_cookie=settings.SESSION_COOKIE_NAME,
    https_only=settings.is_production,
)

routers_config = [
    ("contactInformationDisplay", contact_information_display_router, "Contact information display endpoints"),
    ("followers", followers_router, "Follower view endpoints"),
    ("groupTagging", group_tagging_router, "Group membership, admin and tag endpoints"),
]

for router_name, router, description in routers_config:
    app.include_router(router)
    logger.info("Included %s router: %s", router_name, description)


@app.get("/health", tags=["System"])
async def health():
    """Report whether the database answers a ping."""
    if await db_manager.health_check():
        return {"status": "healthy", "database": "connected"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unhealthy", "database": "disconnected"},
    )


Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    should_respect_env_var=False,
    should_instrument_requests_inprogress=True,
).instrument(app).expose(app, include_in_schema=False, endpoint="/metrics")


if __name__ == "__main__":
    uvicorn.run("freet_social.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG, log_level="info")
