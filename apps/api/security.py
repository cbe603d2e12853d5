"""
Bearer token authentication.

Validates JWTs issued by the configured identity provider before any order
handler runs.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import jwt
from jwt import PyJWKClient

from core.settings.sections.auth import AuthSettings

logger = logging.getLogger(__name__)


class UnauthorizedError(Exception):
    """Raised when a request carries no valid bearer token."""

    def __init__(self, message: str = "Unauthorized"):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller."""

    subject: Optional[str]
    claims: Dict[str, Any] = field(default_factory=dict)


class JwtBearerAuthenticator:
    """
    Verify bearer tokens with PyJWT.

    Key material comes from the issuer's JWKS endpoint (signing keys are
    cached by PyJWKClient) or, for local environments, from a shared HS256
    secret. Issuer and audience are enforced when configured.
    """

    def __init__(self, settings: AuthSettings):
        self.settings = settings
        self._jwks_client: Optional[PyJWKClient] = None

        if settings.shared_secret:
            self._algorithms = ["HS256"]
        else:
            jwks_url = settings.resolved_jwks_url
            if not jwks_url:
                raise RuntimeError(
                    "Authentication is enabled but neither AUTH_ISSUER_URI, "
                    "AUTH_JWKS_URL nor AUTH_SHARED_SECRET is configured"
                )
            self._jwks_client = PyJWKClient(jwks_url, cache_keys=True)
            self._algorithms = list(settings.algorithms)
            logger.info(f"JWT validation against JWKS: {jwks_url}")

    def authenticate(self, token: str) -> Principal:
        """
        Decode and validate `token`.

        Raises:
            UnauthorizedError: If the token is malformed, badly signed,
                expired, or issued for another issuer/audience
        """
        try:
            if self._jwks_client is not None:
                key = self._jwks_client.get_signing_key_from_jwt(token).key
            else:
                key = self.settings.shared_secret

            claims = jwt.decode(
                token,
                key,
                algorithms=self._algorithms,
                audience=self.settings.audience or None,
                issuer=self.settings.issuer_uri or None,
                leeway=self.settings.leeway_seconds,
                options={
                    "require": ["exp"],
                    "verify_aud": bool(self.settings.audience),
                },
            )
        except jwt.PyJWTError as e:
            logger.info(f"Rejected bearer token: {e}")
            raise UnauthorizedError(str(e))

        return Principal(subject=claims.get("sub"), claims=claims)
