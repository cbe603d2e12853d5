from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class ApiSettings(BaseSettings):
    """
    HTTP surface settings.
    Loaded automatically from .env with prefix API_*
    """

    title: str = "Order Management API"
    version: str = "1.0.0"

    # Mount point for the order routes; empty serves /orders directly
    prefix: str = ""

    cors_origins: List[str] = Field(default_factory=list)
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8080

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "API_",
        "extra": "ignore",
    }
