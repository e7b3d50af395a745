"""
Reddyt - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Exposes the admin API

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

import redis.asyncio as redis
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reddyt import __version__
from reddyt.config.provider import ConfigProvider, EnvConfigProvider
from reddyt.logging_config import get_logging_config
from reddyt.modules.api import FailRunRequest, HealthResponse, RunStateResponse
from reddyt.modules.auth import (
    AuthFactory,
    Authenticated,
    AuthenticationGateway,
    AuthResult,
    Clock,
    GatewayError,
)
from reddyt.modules.runs import (
    FrozenStateError,
    RedisRunStore,
    Run,
    RunNotFoundError,
    RunService,
)
from reddyt.modules.storage import StorageModule

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Invalid or not provided credentials."


def error_response(status_code: int, message: str) -> JSONResponse:
    """Format an error body."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "status": status_code},
    )


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    redis_client: Optional[redis.Redis] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Configuration provider (defaults to environment)
        redis_client: Pre-built Redis client; when None one is opened at startup
        clock: Optional time source for the authentication gateway

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()
    api_config = config_provider.get_api_config()
    auth_config = config_provider.get_auth_config()
    cookie_name = auth_config.cookie_name

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - initialize and cleanup resources.
        """
        logger.info("Starting Reddyt API...")

        storage = None
        client = redis_client
        if client is None:
            storage = StorageModule(config_provider.get_storage_config())
            client = await storage.connect()

        # Build authentication gateway via factory (dependency injection)
        app.state.gateway = AuthFactory.build(config_provider, clock=clock)
        app.state.run_service = RunService(RedisRunStore(client))
        logger.info("Reddyt API started successfully")

        yield

        logger.info("Shutting down Reddyt API...")
        if storage:
            await storage.disconnect()
        logger.info("Reddyt API shutdown complete")

    app = FastAPI(
        title="Reddyt API",
        description="Reddyt - content pipeline administration",
        version=__version__,
        lifespan=lifespan,
    )

    # Dependency injection helpers

    def get_gateway(request: Request) -> AuthenticationGateway:
        gateway = getattr(request.app.state, "gateway", None)
        if gateway is None:
            raise HTTPException(503, "Service not initialized")
        return gateway

    def get_run_service(request: Request) -> RunService:
        service = getattr(request.app.state, "run_service", None)
        if service is None:
            raise HTTPException(503, "Service not initialized")
        return service

    async def authenticate(
        request: Request,
        gateway: AuthenticationGateway = Depends(get_gateway),
    ) -> AuthResult:
        return gateway.authenticate(
            authorization=request.headers.get("Authorization"),
            cookie=request.cookies.get(cookie_name),
        )

    async def require_auth(result: AuthResult = Depends(authenticate)) -> Authenticated:
        """Reject the request with a uniform 401 unless it is authenticated."""
        if not result.ok:
            raise HTTPException(status_code=401, detail=UNAUTHORIZED_MESSAGE)
        return result

    # Authentication endpoints

    @app.post("/authentication/login", status_code=204)
    async def login(auth: Authenticated = Depends(require_auth)):
        """
        Exchange credentials for a session cookie.

        Returns:
            204: Cookie set
            401: Unauthorized
        """
        response = Response(status_code=204)
        response.set_cookie(
            cookie_name,
            auth.token,
            max_age=auth_config.session_ttl,
            path="/",
            httponly=True,
            secure=api_config.production,
        )
        return response

    @app.post("/authentication/logout", status_code=204)
    async def logout(_: Authenticated = Depends(require_auth)):
        """
        Remove the session cookie.

        Returns:
            204: Cookie removed
            401: Unauthorized
        """
        response = Response(status_code=204)
        response.delete_cookie(
            cookie_name,
            path="/",
            httponly=True,
            secure=api_config.production,
        )
        return response

    # Run endpoints

    @app.post("/profiles/{profile_id}/runs", response_model=Run, status_code=201)
    async def start_run(
        profile_id: int,
        _: Authenticated = Depends(require_auth),
        service: RunService = Depends(get_run_service),
    ):
        """Create a new idling run for a profile."""
        return await service.start_run(profile_id)

    @app.get("/profiles/{profile_id}/runs", response_model=List[Run])
    async def list_runs(
        profile_id: int,
        _: Authenticated = Depends(require_auth),
        service: RunService = Depends(get_run_service),
    ):
        return await service.list_runs(profile_id)

    @app.get("/runs/{run_id}", response_model=Run)
    async def get_run(
        run_id: int,
        _: Authenticated = Depends(require_auth),
        service: RunService = Depends(get_run_service),
    ):
        return await service.get_run(run_id)

    @app.post("/runs/{run_id}/advance", response_model=RunStateResponse)
    async def advance_run(
        run_id: int,
        _: Authenticated = Depends(require_auth),
        service: RunService = Depends(get_run_service),
    ):
        """
        Advance a run to its next stage.

        Returns:
            200: New state
            404: Run not found
            409: Run is done or failed
        """
        run = await service.advance_run(run_id)
        return RunStateResponse(run_id=run.id, current_state=run.current_state, error=run.error)

    @app.post("/runs/{run_id}/fail", response_model=RunStateResponse)
    async def fail_run(
        run_id: int,
        payload: FailRunRequest,
        _: Authenticated = Depends(require_auth),
        service: RunService = Depends(get_run_service),
    ):
        """
        Mark a run as failed.

        Returns:
            200: Run is now in the error state
            404: Run not found
            409: Run is done or already failed
        """
        run = await service.fail_run(run_id, payload.message)
        return RunStateResponse(run_id=run.id, current_state=run.current_state, error=run.error)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=__version__)

    # Error handlers

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request, exc):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request, exc):
        """Handle infrastructure failures during authentication."""
        logger.error(f"Error during authentication: {exc}")
        return error_response(500, "Internal error during authentication")

    @app.exception_handler(RunNotFoundError)
    async def run_not_found_handler(request, exc):
        return error_response(404, str(exc))

    @app.exception_handler(FrozenStateError)
    async def frozen_state_handler(request, exc):
        """A scheduler tried to move a finished or failed run."""
        logger.error(f"Rejected transition: {exc}")
        return error_response(409, str(exc))

    @app.exception_handler(redis.ConnectionError)
    async def redis_error_handler(request, exc):
        """Handle Redis connection errors."""
        logger.error(f"Redis connection error: {exc}")
        return error_response(503, "Database connection failed")

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn."""
    api_config = EnvConfigProvider().get_api_config()
    uvicorn.run(
        "reddyt.main:app",
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config),
    )


if __name__ == "__main__":
    run()
