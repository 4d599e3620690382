"""
Configuration Management Module
"""
from .settings import (
    Settings,
    ListingSettings,
    MarkupSettings,
    GeneralSettings,
    get_settings,
    get_listing_settings,
    get_markup_settings,
    get_general_settings,
)

__all__ = [
    "Settings",
    "ListingSettings",
    "MarkupSettings",
    "GeneralSettings",
    "get_settings",
    "get_listing_settings",
    "get_markup_settings",
    "get_general_settings",
]
