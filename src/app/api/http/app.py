"""FastAPI application setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.app.api.http.app_data import ApplicationDependencies
from src.app.api.http.routers.service.user import router as user_router
from src.app.api.utils.app_startup import configure_logging
from src.app.core.services import DbManageService, DbSessionService
from src.app.runtime.context import get_config

# Load configuration
main_config = get_config()


# Initialize logging
configure_logging()


# --- FastAPI app setup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="User Directory",
    lifespan=lifespan,
    docs_url=None if main_config.app.environment == "production" else "/docs",
    redoc_url=None if main_config.app.environment == "production" else "/redoc",
)

# expose startup for tests
__all__ = ["app", "startup", "shutdown", "run"]

# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=main_config.app.cors.origins,
    allow_credentials=main_config.app.cors.allow_credentials,
    allow_methods=main_config.app.cors.allow_methods,
    allow_headers=main_config.app.cors.allow_headers,
)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.debug("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("{} {} -> {}", request.method, request.url.path, response.status_code)

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
                content={"error": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- Error envelopes ---
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Request validation failed: {}", exc.errors())
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "details": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
                for error in exc.errors()
            ],
        },
    )


# --- Lifecycle hooks ---
async def startup() -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config.database)
    DbManageService(database_service.engine).create_all()

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
    )
    logger.info("Server running on {}", config.app.base_url)


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


# --- Route handlers ---


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, str] | JSONResponse:
    """Readiness check endpoint; verifies database connectivity."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    if not app_deps.database_service.health_check():
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    return {"status": "ready"}


# --- Router registration ---
app.include_router(user_router, prefix=main_config.app.api_prefix)

# Static assets go last: a mount at "/" matches every remaining path
app.mount(
    "/",
    StaticFiles(directory=main_config.app.static_dir, html=True, check_dir=False),
    name="static",
)


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        app,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # We handle access logging in middleware
        log_config=None,  # Keep the Loguru interception configured above
    )


if __name__ == "__main__":
    run()
