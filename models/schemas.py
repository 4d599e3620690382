"""
Data Models / Schemas
Story records and per-page results
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ListingKind(str, Enum):
    """Which listing to read"""
    NEWS = "news"
    NEWEST = "newest"


class Story(BaseModel):
    """
    One listing entry.

    Promoted entries carry no author, score or comment count; those fields
    are ``None`` rather than a zero, which is a legitimate value.
    """
    title: str = Field(..., min_length=1, max_length=256, description="Story title")
    link: str = Field(..., description="Absolute or relative story URI")
    author: Optional[str] = Field(None, min_length=1, max_length=256, description="Submitter")
    score: Optional[int] = Field(None, ge=0, description="Points")
    comment_count: Optional[int] = Field(
        None, ge=0, alias="commentCount", description="Comments, 0 for 'discuss'"
    )
    rank: int = Field(..., ge=1, description="Position printed on the source page")

    class Config:
        frozen = True
        populate_by_name = True

    @property
    def is_advertisement(self) -> bool:
        return self.author is None and self.score is None and self.comment_count is None


class PageResult(BaseModel):
    """Stories assembled from one listing page, in document order"""
    page: int = Field(..., ge=1, description="1-based page number")
    stories: List[Story] = Field(default_factory=list)

    class Config:
        frozen = True

    def __len__(self) -> int:
        return len(self.stories)
