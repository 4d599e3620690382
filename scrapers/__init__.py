"""
Scrapers Module
"""
from .base import BaseScraper
from .hackernews_scraper import HackerNewsScraper

__all__ = [
    "BaseScraper",
    "HackerNewsScraper",
]
