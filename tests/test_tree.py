"""
Unit tests for the tree query helpers.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from extraction import tree
from extraction.assembler import parse_document


def _doc(html: str) -> BeautifulSoup:
    return parse_document(html, "lxml")


def _names(nodes):
    return [node.name if tree.is_element(node) else str(node) for node in nodes]


def test_find_all_with_none_root_is_empty():
    assert tree.find_all(None, lambda node: True) == []


def test_find_all_visits_pre_order_then_following_siblings():
    doc = _doc(
        "<div id='outer'>"
        "<p class='x'><b class='x'>1</b></p>"
        "<i class='x'>2</i>"
        "</div>"
        "<span class='x'>3</span>"
    )
    p = doc.find("p")

    matches = tree.find_all(p, tree.find_by_class("x"))

    # starting at <p>: itself, its <b>, then the sibling <i>; never climbs to <span>
    assert _names(matches) == ["p", "b", "i"]


def test_find_all_does_not_look_at_preceding_siblings():
    doc = _doc("<ul><li class='a'>1</li><li class='b'>2</li><li class='a'>3</li></ul>")
    second = doc.find("li", class_="b")

    matches = tree.find_all(second, tree.find_by_class("a"))

    assert [node.get_text() for node in matches] == ["3"]


def test_find_by_class_requires_exact_value():
    doc = _doc(
        "<table>"
        "<tr class='athing'><td>a</td></tr>"
        "<tr class='athing submission'><td>b</td></tr>"
        "<tr class='Athing'><td>c</td></tr>"
        "</table>"
    )

    plain = tree.find_all(doc, tree.find_by_class("athing"))
    combined = tree.find_all(doc, tree.find_by_class("athing submission"))

    assert [node.get_text() for node in plain] == ["a"]
    assert [node.get_text() for node in combined] == ["b"]


def test_find_by_attribute_ignores_text_nodes_and_other_keys():
    doc = _doc("<div id='x'>x<span title='x'>y</span></div>")

    matches = tree.find_all(doc, tree.find_by_attribute("id", "x"))

    assert _names(matches) == ["div"]


def test_find_by_class_joins_split_class_lists():
    # default bs4 builder splits class into a list
    doc = BeautifulSoup("<p class='athing submission'>z</p>", "lxml")

    matches = tree.find_all(doc, tree.find_by_class("athing submission"))

    assert [node.get_text() for node in matches] == ["z"]


def test_previous_element_sibling_skips_text():
    doc = _doc("<table><tr><td><a>first</a> | <a>second</a> </td></tr></table>")
    td = doc.find("td")

    found = tree.previous_element_sibling(td.contents[-1])

    assert found is not None
    assert found.get_text() == "second"


def test_previous_element_sibling_not_found():
    doc = _doc("<table><tr><td>only text<a>link</a></td></tr></table>")
    first = doc.find("td").contents[0]

    assert tree.previous_element_sibling(first) is None
    assert tree.previous_element_sibling(None) is None


def test_first_attribute():
    assert tree.first_attribute("href", {"class": "storylink", "href": "/x"}) == "/x"
    assert tree.first_attribute("href", {"class": "storylink"}) is None
    assert tree.first_attribute("href", {}) is None
    assert tree.first_attribute("class", {"class": ["a", "b"]}) == "a b"


def test_node_kinds():
    doc = _doc("<p>text<!-- note --></p>")
    p = doc.find("p")
    text, comment = p.contents

    assert tree.is_element(p)
    assert not tree.is_element(doc)
    assert tree.is_text(text)
    assert not tree.is_text(comment)
    assert not tree.is_text(p)


def test_deeply_nested_document_does_not_recurse():
    soup = BeautifulSoup("", "lxml")
    current = soup
    depth = 2000
    for _ in range(depth):
        child = soup.new_tag("div")
        current.append(child)
        current = child
    current["class"] = "leaf"

    matches = tree.find_all(soup, tree.find_by_class("leaf"))

    assert len(matches) == 1
    assert matches[0] is current
