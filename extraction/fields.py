"""
Field Extractors
One rule per story field. Every extractor locates exactly one element by
class, reads its first child as text and parses it, raising an
``ExtractionError`` subclass at the first step that does not hold.
"""
import re
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from bs4.element import PageElement, Tag

from config import MarkupSettings, get_markup_settings
from utils.exceptions import (
    FormatMismatchError,
    MissingContentError,
    NodeTypeMismatchError,
    StructuralMismatchError,
)

from .tree import (
    find_all,
    find_by_class,
    first_attribute,
    first_child,
    is_element,
    is_text,
    last_child,
    previous_element_sibling,
)


_POINTS_RE = re.compile(r"\D*points?")
_COMMENTS_RE = re.compile(r"\D*comments?")
_DIGITS_RE = re.compile(r"[0-9]+")


def _markup(markup: Optional[MarkupSettings]) -> MarkupSettings:
    return markup if markup is not None else get_markup_settings()


def _locate_single(root: Optional[PageElement], class_name: str, field: str) -> Tag:
    matches = find_all(root, find_by_class(class_name))
    if len(matches) != 1:
        raise StructuralMismatchError(
            f"{field} nodes length is not exactly one",
            field=field,
            css_class=class_name,
            matches=len(matches),
        )
    return matches[0]


def _first_text(node: Tag, field: str) -> str:
    child = first_child(node)
    if child is None:
        raise MissingContentError(f"{field} node does not have any children", field=field)
    if not is_text(child):
        raise NodeTypeMismatchError(f"{field} node child is not a text node", field=field)
    return str(child)


def _to_int(text: str, field: str) -> int:
    # ASCII digits only: no sign, underscores, padding or other scripts
    if not _DIGITS_RE.fullmatch(text):
        raise FormatMismatchError(
            f"{field} failed to convert to integer", field=field, text=text
        )
    return int(text)


def extract_title(fragment: Tag, markup: Optional[MarkupSettings] = None) -> str:
    markup = _markup(markup)
    node = _locate_single(first_child(fragment), markup.title_link, "title")
    return _first_text(node, "title")[: markup.max_text_length]


def extract_link(fragment: Tag, markup: Optional[MarkupSettings] = None) -> str:
    """Story href, normalized through a split/unsplit round trip"""
    markup = _markup(markup)
    node = _locate_single(first_child(fragment), markup.title_link, "link")
    if not is_element(node) or node.name != "a":
        raise NodeTypeMismatchError("link node is not an anchor", field="link")

    href = first_attribute("href", node.attrs)
    if href is None:
        raise MissingContentError("link node does not have a href attribute", field="link")

    try:
        parts = urlsplit(href)
        # port is validated lazily by urllib
        parts.port
    except ValueError as e:
        raise FormatMismatchError(f"link is not a valid URI: {e}", field="link", href=href) from e
    return urlunsplit(parts)


def extract_author(metadata_row: PageElement, markup: Optional[MarkupSettings] = None) -> str:
    markup = _markup(markup)
    node = _locate_single(metadata_row, markup.user, "author")
    return _first_text(node, "author")[: markup.max_text_length]


def extract_rank(fragment: Tag, markup: Optional[MarkupSettings] = None) -> int:
    markup = _markup(markup)
    node = _locate_single(first_child(fragment), markup.rank, "rank")
    text = _first_text(node, "rank")
    rank = _to_int(text.replace(".", "", 1), "rank")
    if rank < 1:
        raise FormatMismatchError("rank is not a positive integer", field="rank", text=text)
    return rank


def extract_score(metadata_row: PageElement, markup: Optional[MarkupSettings] = None) -> int:
    markup = _markup(markup)
    node = _locate_single(metadata_row, markup.score, "score")
    text = _first_text(node, "score")
    return _to_int(_POINTS_RE.sub("", text), "score")


def locate_comment_text(metadata_row: PageElement, markup: Optional[MarkupSettings] = None) -> str:
    """
    Text of the comments link.

    In the listing markup this is the last element inside the subtext
    container that precedes its final child ("42 comments", "discuss", or
    "hide" for promoted entries).
    """
    markup = _markup(markup)
    subtext = _locate_single(metadata_row, markup.subtext, "comments")

    comment_node = previous_element_sibling(last_child(subtext))
    if comment_node is None:
        raise MissingContentError("comment node is missing", field="comments")
    return _first_text(comment_node, "comments")


def is_advertisement(metadata_row: PageElement, markup: Optional[MarkupSettings] = None) -> bool:
    """
    Promoted entries end their subtext with a lone "hide" link.

    A metadata row that cannot be inspected raises instead of reporting
    False.
    """
    markup = _markup(markup)
    return locate_comment_text(metadata_row, markup) == markup.ad_marker


def extract_comment_count(metadata_row: PageElement, markup: Optional[MarkupSettings] = None) -> int:
    markup = _markup(markup)
    text = locate_comment_text(metadata_row, markup)
    if text == markup.discuss_marker:
        return 0
    return _to_int(_COMMENTS_RE.sub("", text), "comments")
