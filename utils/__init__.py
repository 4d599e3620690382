"""
Utils Module
Logging setup and exception hierarchy
"""
from .logger import setup_logger
from .exceptions import (
    ListingScraperError,
    ConfigurationError,
    InvalidRequestError,
    ScraperError,
    PageFetchError,
    ExtractionError,
    StructuralMismatchError,
    MissingContentError,
    NodeTypeMismatchError,
    FormatMismatchError,
    DocumentParseError,
    MergeError,
)

__all__ = [
    "setup_logger",
    "ListingScraperError",
    "ConfigurationError",
    "InvalidRequestError",
    "ScraperError",
    "PageFetchError",
    "ExtractionError",
    "StructuralMismatchError",
    "MissingContentError",
    "NodeTypeMismatchError",
    "FormatMismatchError",
    "DocumentParseError",
    "MergeError",
]
