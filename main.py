import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

# Add src directory to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))

import httpx
import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from src.api import city_info_router, health_router
from src.api.city_info.city_info_routes import SERVER_ERROR_MESSAGE
from src.config.config import Config, config
from src.models.problem import BAD_REQUEST_TYPE, ProblemDetails
from src.services.city_info_service import CityInfoService
from src.services.lookup_client import LookupClient
from src.utils.logging_config import setup_logging

# Configure logging
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Opens the shared upstream HTTP client unless one was injected, builds the
    lookup handler around it, and closes the client on shutdown.
    """
    logger.info("Starting City Info application")

    settings: Config = app.state.settings
    http_client = app.state.http_client
    if http_client is None:
        http_client = httpx.AsyncClient(base_url=settings.upstream_base_url)
        app.state.http_client = http_client
    app.state.city_info_service = CityInfoService(
        lookup_client=LookupClient(http_client),
        string_params=settings.string_param_config,
        end_points=settings.end_points,
    )

    try:
        yield
    finally:
        logger.info("Shutting down City Info application")
        await http_client.aclose()


def create_app(settings: Optional[Config] = None, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (defaults to the process-wide config)
        http_client: Client used for upstream calls (defaults to a new client
            bound to the configured upstream base URL, opened at startup)

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or config

    app = FastAPI(
        title="City Info API",
        description="""
        ## City Info API

        Resolves a zip code to its city name and the city's current weather.

        ### Features:
        - **City Weather**: `GET /CityInfo?zipCode=...` queries the zip lookup
          service for the city, then the weather service for its weather
        - **Health**: `GET /health`
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Collaborators shared read-only by all requests, wired in lifespan
    app.state.settings = settings
    app.state.http_client = http_client

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests with timing information."""
        start_time = time.time()

        logger.info(
            "HTTP request started",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "HTTP request completed",
                method=request.method,
                url=str(request.url),
                status_code=response.status_code,
                process_time=process_time,
            )

            response.headers["X-Process-Time"] = str(process_time)
            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "HTTP request failed",
                method=request.method,
                url=str(request.url),
                error=str(e),
                process_time=process_time,
            )
            raise

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions globally."""
        logger.error(
            "Unhandled exception",
            method=request.method,
            url=str(request.url),
            error=str(exc),
            exc_info=exc,
        )

        return PlainTextResponse(SERVER_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Missing or malformed query parameters
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Reject invalid request parameters with a 400 problem body."""
        errors = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("query", "path"))
            errors.setdefault(field or "request", []).append(error.get("msg", "Invalid value"))

        logger.warning("Request validation failed", url=str(request.url), errors=errors)

        problem = ProblemDetails(
            type=BAD_REQUEST_TYPE,
            title="One or more validation errors occurred.",
            status=status.HTTP_400_BAD_REQUEST,
            instance=request.url.path,
            errors=errors,
        )
        return JSONResponse(
            status_code=problem.status,
            content=problem.model_dump(exclude_none=True),
            media_type="application/problem+json",
        )

    app.include_router(health_router)
    app.include_router(city_info_router)

    return app


# Create the application instance
app = create_app()


def main():
    logger.info(
        f"Starting City Info server in {config.environment} environment",
        host=config.api_host,
        port=config.api_port,
        reload=False,
    )

    try:
        uvicorn.run(
            app,
            host=config.api_host,
            port=config.api_port,
            log_level=config.log_level.lower(),
            access_log=True,
            server_header=False,
            date_header=False,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Server failed to start", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
