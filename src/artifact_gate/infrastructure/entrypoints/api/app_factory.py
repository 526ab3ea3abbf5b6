import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from artifact_gate.infrastructure.config.app_config import AppConfig
from artifact_gate.infrastructure.entrypoints.api.github_webhook_router import (
    router as github_router,
)
from artifact_gate.infrastructure.entrypoints.api.health_router import router as health_router
from artifact_gate.infrastructure.observability.logger_factory_service import configure_logging
from artifact_gate.infrastructure.observability.logging import CorrelationMiddleware
from artifact_gate.infrastructure.observability.tracing_setup import configure_tracing

logger = structlog.get_logger()


def create_app(config: AppConfig) -> FastAPI:
    configure_logging(config.app.log_level)
    configure_tracing(export_to_console=config.app.trace_to_console)
    logger.info(
        "Boot diagnostics",
        app_name=config.app.app_name,
        github_api_url=config.github.api_url,
        rally_server=config.rally.server,
        rally_auth="api_key" if config.rally.api_key else "basic",
        webhook_secret_present=config.github.webhook_secret is not None,
        enforce_all_repos=config.gate.enforce_all_repos,
    )

    app = FastAPI(title=config.app.app_name)
    app.add_middleware(CorrelationMiddleware)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.error(
            "Request validation failed",
            error_type="RequestValidationError",
            error_details=str(exc.errors()),
            context_endpoint=str(request.url.path),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
        )

    app.include_router(health_router)
    app.include_router(github_router, prefix="/api/v1")
    app.mount("/metrics", make_asgi_app())

    return app
