"""
Record Assembler
Turns one listing page into its stories, in document order.
"""
import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup, FeatureNotFound, ParserRejectedMarkup
from bs4.element import PageElement
from pydantic import ValidationError

from config import MarkupSettings, get_markup_settings
from models import Story
from utils.exceptions import (
    ConfigurationError,
    DocumentParseError,
    ExtractionError,
    FormatMismatchError,
)

from .fields import (
    extract_author,
    extract_comment_count,
    extract_link,
    extract_rank,
    extract_score,
    extract_title,
    is_advertisement,
)
from .tree import find_all, find_by_class, first_child, next_element_sibling


logger = logging.getLogger(__name__)


def parse_document(content: Union[bytes, str], parser: str = "lxml") -> BeautifulSoup:
    """
    Parse raw page content.

    ``class`` is kept as its source string so fragments are matched on the
    exact attribute value.
    """
    try:
        return BeautifulSoup(content, parser, multi_valued_attributes=None)
    except FeatureNotFound as e:
        raise ConfigurationError(f"HTML parser '{parser}' is not available") from e
    except ParserRejectedMarkup as e:
        raise DocumentParseError(f"Page could not be parsed: {e}") from e


def _metadata_row(fragment: PageElement) -> Optional[PageElement]:
    # the row right after the fragment holds author, score and comments
    return first_child(next_element_sibling(fragment))


def assemble_story(fragment: PageElement, markup: MarkupSettings) -> Optional[Story]:
    """
    Build the story for one fragment, or None when it has no metadata row.
    """
    title = extract_title(fragment, markup)
    link = extract_link(fragment, markup)

    metadata_row = _metadata_row(fragment)
    if metadata_row is None:
        return None

    author = score = comment_count = None
    if not is_advertisement(metadata_row, markup):
        author = extract_author(metadata_row, markup)
        score = extract_score(metadata_row, markup)
        comment_count = extract_comment_count(metadata_row, markup)

    rank = extract_rank(fragment, markup)

    try:
        return Story(
            title=title,
            link=link,
            author=author,
            score=score,
            comment_count=comment_count,
            rank=rank,
        )
    except ValidationError as e:
        invalid = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        raise FormatMismatchError(f"story fields out of range: {invalid}", field=invalid) from e


def assemble_page(document: PageElement, markup: Optional[MarkupSettings] = None) -> List[Story]:
    """
    Extract every story fragment below ``document``.

    Any extraction failure aborts the page. Fragments without a metadata row
    (a truncated trailing entry) are skipped.
    """
    markup = markup if markup is not None else get_markup_settings()
    stories: List[Story] = []

    for index, fragment in enumerate(find_all(document, find_by_class(markup.story))):
        try:
            story = assemble_story(fragment, markup)
        except ExtractionError as e:
            raise e.annotate(fragment=index)

        if story is None:
            logger.debug(f"Fragment {index} has no metadata row, skipping")
            continue
        stories.append(story)

    return stories


def parse_listing(
    content: Union[bytes, str],
    parser: str = "lxml",
    markup: Optional[MarkupSettings] = None,
) -> List[Story]:
    """Parse a listing page and assemble its stories"""
    return assemble_page(parse_document(content, parser), markup)
