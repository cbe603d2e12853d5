from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    """
    Bearer token (JWT) validation settings.
    Loaded automatically from .env with prefix AUTH_*

    Tokens are verified either against the issuer's JWKS (RS256, e.g. a
    Cognito user pool) or, when `shared_secret` is set, with HS256.
    """

    enabled: bool = True

    # e.g. https://cognito-idp.eu-west-1.amazonaws.com/eu-west-1_AbCdEf
    issuer_uri: Optional[str] = None

    # App client id; blank disables the audience check
    audience: Optional[str] = None

    # Defaults to {issuer_uri}/.well-known/jwks.json
    jwks_url: Optional[str] = None

    # Local/dev only
    shared_secret: Optional[str] = None

    algorithms: List[str] = Field(default_factory=lambda: ["RS256"])
    leeway_seconds: int = 0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "AUTH_",
        "extra": "ignore",
    }

    @property
    def resolved_jwks_url(self) -> Optional[str]:
        if self.jwks_url:
            return self.jwks_url
        if self.issuer_uri:
            return f"{self.issuer_uri.rstrip('/')}/.well-known/jwks.json"
        return None
