# core/settings/app.py
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.sections.api import ApiSettings
from core.settings.sections.auth import AuthSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.orders import OrderSettings


class AppSettings(BaseModel):
    """
    Central application settings aggregator.

    Each section reads its own env prefix; sections are only instantiated
    by get_app_settings(), never at import time.
    """

    model_config = ConfigDict(extra="ignore")

    api: ApiSettings
    auth: AuthSettings
    database: DatabaseSettings
    orders: OrderSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings(
        api=ApiSettings(),
        auth=AuthSettings(),
        database=DatabaseSettings(),
        orders=OrderSettings(),
    )
