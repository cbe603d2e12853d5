from pydantic import Field
from pydantic_settings import BaseSettings


class OrderSettings(BaseSettings):
    """
    Order listing and cancellation tuning.
    Loaded automatically from .env with prefix ORDERS_*
    """

    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=2000, ge=1)

    # Read-modify-write attempts per cancel (1 retry on version conflict)
    cancel_max_attempts: int = Field(default=2, ge=1)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "ORDERS_",
        "extra": "ignore",
    }
