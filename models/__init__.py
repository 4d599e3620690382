"""
Data Models
"""
from .schemas import (
    ListingKind,
    Story,
    PageResult,
)

__all__ = [
    "ListingKind",
    "Story",
    "PageResult",
]
