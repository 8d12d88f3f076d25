"""
API-key authentication for the grading API.

Every protected route compares the caller's key to the single configured
secret. The comparison is constant-time and every failure looks the same to
the caller.
"""

import hmac
import logging
from typing import Callable

from fastapi import Request, Security
from fastapi.security import APIKeyHeader, APIKeyQuery
from pydantic import SecretStr

from .errors import AuthenticationError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"
API_KEY_QUERY_PARAM = "apiKey"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)
api_key_query = APIKeyQuery(name=API_KEY_QUERY_PARAM, auto_error=False)


class APIKeyAuthenticator:
    """
    Validates the API key presented with a request.

    Usage:
        from fastapi import Depends

        authenticator = APIKeyAuthenticator(settings.api_secret_key)

        @app.get("/protected")
        async def protected(_=Depends(authenticator.require_api_key())):
            return {"ok": True}
    """

    def __init__(self, secret: SecretStr | str | None):
        """
        Initialize the authenticator.

        Args:
            secret: The configured API secret. ``None`` or empty rejects every request.
        """
        if isinstance(secret, SecretStr):
            secret = secret.get_secret_value()
        self._secret = secret.encode("utf-8") if secret else None
        if self._secret is None:
            logger.error("API secret key is not configured; all protected routes will answer 401")

    @property
    def configured(self) -> bool:
        return self._secret is not None

    def is_valid(self, presented: str | None) -> bool:
        """Constant-time comparison of ``presented`` with the configured secret."""
        if self._secret is None or not presented:
            return False
        return hmac.compare_digest(presented.encode("utf-8"), self._secret)

    def authenticate(self, request: Request, presented: str | None) -> None:
        """
        Raise unless ``presented`` matches the configured secret.

        Raises:
            AuthenticationError: on a missing key, a wrong key or a missing secret
        """
        if not self.is_valid(presented):
            logger.warning(
                "Rejected request to %s %s: %s",
                request.method,
                request.url.path,
                "no API key presented" if not presented else "API key mismatch",
            )
            raise AuthenticationError()

    def require_api_key(self) -> Callable:
        """
        Create a FastAPI dependency that enforces the API key.

        The header wins over the query parameter when both are present.

        Returns:
            FastAPI dependency function
        """
        async def dependency(
            request: Request,
            header_key: str | None = Security(api_key_header),
            query_key: str | None = Security(api_key_query),
        ) -> None:
            """Dependency that validates the API key."""
            self.authenticate(request, header_key if header_key is not None else query_key)

        return dependency
