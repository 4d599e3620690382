"""
Extraction Module
DOM queries, field extraction and per-page story assembly
"""
from .tree import (
    find_all,
    find_by_attribute,
    find_by_class,
    first_attribute,
    iter_nodes,
    previous_element_sibling,
)
from .fields import (
    extract_title,
    extract_link,
    extract_author,
    extract_rank,
    extract_score,
    extract_comment_count,
    locate_comment_text,
    is_advertisement,
)
from .assembler import assemble_page, assemble_story, parse_document, parse_listing

__all__ = [
    # Tree queries
    "find_all",
    "find_by_attribute",
    "find_by_class",
    "first_attribute",
    "iter_nodes",
    "previous_element_sibling",
    # Fields
    "extract_title",
    "extract_link",
    "extract_author",
    "extract_rank",
    "extract_score",
    "extract_comment_count",
    "locate_comment_text",
    "is_advertisement",
    # Assembly
    "assemble_page",
    "assemble_story",
    "parse_document",
    "parse_listing",
]
