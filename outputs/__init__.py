"""
Outputs Module
"""
from .exporter import encode_stories, story_to_dict

__all__ = [
    "encode_stories",
    "story_to_dict",
]
