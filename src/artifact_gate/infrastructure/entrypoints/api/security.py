import hashlib
import hmac

from fastapi import Depends, Header, HTTPException, Request, status

from artifact_gate.infrastructure.config.app_config import AppConfig, get_app_config

SIGNATURE_PREFIX = "sha256="


def compute_signature(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


async def validate_github_signature(
    request: Request,
    x_hub_signature_256: str | None = Header(default=None),
    config: AppConfig = Depends(get_app_config),
) -> bytes:
    """Check ``X-Hub-Signature-256`` against the raw body; returns the verified body."""
    secret = config.github.webhook_secret
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook secret not configured",
        )
    if not x_hub_signature_256:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Could not validate signature"
        )
    body = await request.body()
    expected = compute_signature(secret.get_secret_value(), body)
    if not hmac.compare_digest(expected, x_hub_signature_256):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Could not validate signature"
        )
    return body
