"""
Aggregator Module
"""
from .listing_aggregator import (
    ListingAggregator,
    ResultBuffer,
    fetch_listing,
    plan_page_count,
)

__all__ = [
    "ListingAggregator",
    "ResultBuffer",
    "fetch_listing",
    "plan_page_count",
]
