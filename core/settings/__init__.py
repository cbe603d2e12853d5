# Settings package
from core.settings.app import AppSettings, get_app_settings
from core.settings.sections.api import ApiSettings
from core.settings.sections.auth import AuthSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.orders import OrderSettings

__all__ = [
    "get_app_settings",
    "ApiSettings",
    "AppSettings",
    "AuthSettings",
    "DatabaseSettings",
    "OrderSettings",
]
