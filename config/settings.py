"""
Settings Configuration
Pydantic-validated configuration, overridable from the environment or config/.env
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class ListingSettings(BaseSettings):
    """Listing site and pagination"""
    base_url: str = Field(default="https://news.ycombinator.com", description="Listing site root")
    page_capacity: int = Field(default=30, gt=0, description="Stories per listing page")
    max_posts: int = Field(default=100, gt=0, description="Upper bound for requested posts")
    default_posts: int = Field(default=30, gt=0, description="Posts requested when none given")
    parser: str = Field(default="lxml", description="BeautifulSoup tree builder")

    class Config:
        env_prefix = "LISTING_"


class MarkupSettings(BaseSettings):
    """Class names and literal tokens of the listing markup"""
    story: str = Field(default="athing", description="Story fragment row")
    title_link: str = Field(default="storylink", description="Title anchor")
    user: str = Field(default="hnuser", description="Author element")
    rank: str = Field(default="rank", description="Rank element")
    score: str = Field(default="score", description="Score element")
    subtext: str = Field(default="subtext", description="Metadata container")
    ad_marker: str = Field(default="hide", description="Comment-link text of promoted entries")
    discuss_marker: str = Field(default="discuss", description="Comment-link text with no comments yet")
    max_text_length: int = Field(default=256, gt=0, le=256, description="Title/author truncation length")

    class Config:
        env_prefix = "MARKUP_"


class GeneralSettings(BaseSettings):
    """General settings"""
    request_timeout: int = Field(default=30, gt=0, description="Request timeout (seconds)")
    user_agent: str = Field(default="hn-listing/1.0", description="User-Agent header")
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[str] = Field(default=None, description="Log file name under logs/ (optional)")

    class Config:
        env_prefix = "GENERAL_"


class Settings(BaseSettings):
    """Top-level settings, aggregating the sections"""

    listing: ListingSettings = Field(default_factory=ListingSettings)
    markup: MarkupSettings = Field(default_factory=MarkupSettings)
    general: GeneralSettings = Field(default_factory=GeneralSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """Load settings, reading the given .env file first"""
        if env_path is None:
            # config/.env by default
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            listing=ListingSettings(),
            markup=MarkupSettings(),
            general=GeneralSettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings singleton"""
    return Settings.load_from_env_file()


def get_listing_settings() -> ListingSettings:
    return get_settings().listing


def get_markup_settings() -> MarkupSettings:
    return get_settings().markup


def get_general_settings() -> GeneralSettings:
    return get_settings().general
