"""
Pipeline authentication using Bearer token.

Used by the cron trigger and any scheduled task that starts a pipeline run.
"""

import secrets

from fastapi import HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.logging import get_logger
from core.settings import settings

security = HTTPBearer()
log = get_logger("pipeline_auth")


def verify_pipeline_token(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> str:
    """
    Verify the bearer token matches our pipeline secret.

    Raises:
        HTTPException: If the secret is not configured or the token is invalid
    """
    if settings.pipeline_api_token is None:
        log.error("pipeline_token_missing")
        raise HTTPException(
            status_code=500,
            detail="Server misconfigured: PIPELINE_API_TOKEN not set",
        )

    expected = settings.pipeline_api_token.get_secret_value()
    if not secrets.compare_digest(credentials.credentials, expected):
        log.warning("pipeline_token_rejected")
        raise HTTPException(
            status_code=401,
            detail="Invalid pipeline authentication token",
        )

    return credentials.credentials
