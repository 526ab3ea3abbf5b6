import uvicorn

from artifact_gate.infrastructure.config.app_config import get_app_config
from artifact_gate.infrastructure.entrypoints.api.app_factory import create_app


def dev() -> None:
    """Run the development server."""
    config = get_app_config()
    uvicorn.run(
        "artifact_gate.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=config.app.log_level.lower(),
    )


# Instantiate global app for ASGI
app = create_app(get_app_config())
