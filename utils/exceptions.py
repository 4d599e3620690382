"""
Custom Exceptions
Exception hierarchy for the listing scraper
"""
from typing import Optional


class ListingScraperError(Exception):
    """Base exception for the listing scraper"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ListingScraperError):
    """Invalid configuration"""
    pass


class InvalidRequestError(ListingScraperError):
    """Requested post count outside of the accepted range"""
    pass


class ScraperError(ListingScraperError):
    """Page retrieval error"""

    def __init__(self, message: str, source: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.source = source


class PageFetchError(ScraperError):
    """Transport failure or non-success status for a listing page"""

    def __init__(self, message: str, page: Optional[int] = None, **kwargs):
        super().__init__(message, source="hackernews", page=page, **kwargs)
        self.page = page


class ExtractionError(ListingScraperError):
    """
    A story fragment could not be converted into a record.

    Carries the field being extracted and, once known, the fragment index
    and page number it came from.
    """

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.field = field
        if field:
            self.details.setdefault("field", field)

    def annotate(self, **context) -> "ExtractionError":
        """Attach location context without overwriting what is already known"""
        for key, value in context.items():
            if value is not None:
                self.details.setdefault(key, value)
        return self

    @property
    def page(self) -> Optional[int]:
        return self.details.get("page")


class StructuralMismatchError(ExtractionError):
    """Predicate matched zero or several nodes where exactly one was expected"""
    pass


class MissingContentError(ExtractionError):
    """Expected child node or attribute is absent"""
    pass


class NodeTypeMismatchError(ExtractionError):
    """Node is not of the expected text/element kind"""
    pass


class FormatMismatchError(ExtractionError):
    """Text is present but cannot be parsed into the expected form"""
    pass


class DocumentParseError(ExtractionError):
    """The HTML parser failed on the page content"""
    pass


class MergeError(ListingScraperError):
    """Result buffer contains a hole before a filled slot"""
    pass
