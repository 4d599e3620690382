"""
Tree Query Layer
Predicate search over a BeautifulSoup tree.

The walk visits a root, its descendants in pre-order, and then the root's
following siblings with their subtrees, i.e. everything at or after the root
in document order that does not sit above it. It never raises: absence is
reported as an empty list or ``None``.
"""
from typing import Callable, Iterator, List, Mapping, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag


Predicate = Callable[[PageElement], bool]


def is_element(node: Optional[PageElement]) -> bool:
    """True for tags, excluding the document object itself"""
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def is_text(node: Optional[PageElement]) -> bool:
    """True for character data; comments, CDATA, doctypes and the like are not text"""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def first_child(node: Optional[PageElement]) -> Optional[PageElement]:
    if not isinstance(node, Tag) or not node.contents:
        return None
    return node.contents[0]


def last_child(node: Optional[PageElement]) -> Optional[PageElement]:
    if not isinstance(node, Tag) or not node.contents:
        return None
    return node.contents[-1]


def next_element_sibling(node: Optional[PageElement]) -> Optional[Tag]:
    """Nearest following sibling that is an element"""
    if node is None:
        return None
    sibling = node.next_sibling
    while sibling is not None:
        if is_element(sibling):
            return sibling
        sibling = sibling.next_sibling
    return None


def previous_element_sibling(node: Optional[PageElement]) -> Optional[Tag]:
    """Nearest preceding sibling that is an element, strictly before ``node``"""
    if node is None:
        return None
    sibling = node.previous_sibling
    while sibling is not None:
        if is_element(sibling):
            return sibling
        sibling = sibling.previous_sibling
    return None


def iter_nodes(root: Optional[PageElement]) -> Iterator[PageElement]:
    """
    Yield ``root``, its subtree, then its following siblings' subtrees.

    Uses an explicit stack so deeply nested documents cannot exhaust the
    interpreter's recursion limit.
    """
    stack: List[PageElement] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node

        # sibling goes underneath the child so the subtree is finished first
        sibling = node.next_sibling
        if sibling is not None:
            stack.append(sibling)
        child = first_child(node)
        if child is not None:
            stack.append(child)


def find_all(root: Optional[PageElement], predicate: Predicate) -> List[PageElement]:
    """All nodes reachable by :func:`iter_nodes` that satisfy ``predicate``"""
    return [node for node in iter_nodes(root) if predicate(node)]


def first_attribute(key: str, attrs: Optional[Mapping[str, Union[str, List[str]]]]) -> Optional[str]:
    """
    Value of the attribute named ``key`` or ``None``.

    Multi-valued attributes (when the tree was built with bs4's default
    class splitting) are joined back into their source form.
    """
    if not attrs:
        return None
    for name, value in attrs.items():
        if name == key:
            if isinstance(value, (list, tuple)):
                return " ".join(value)
            return value
    return None


def find_by_attribute(key: str, value: str) -> Predicate:
    """Predicate matching elements whose ``key`` attribute equals ``value`` exactly"""
    def _match(node: PageElement) -> bool:
        if not is_element(node):
            return False
        return first_attribute(key, node.attrs) == value

    return _match


def find_by_class(value: str) -> Predicate:
    """
    Exact ``class`` match; ``"athing submission"`` does not match ``"athing"``.
    """
    return find_by_attribute("class", value)
