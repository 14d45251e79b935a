# src/rubric_runner/checks/style.py
import re
from typing import Any, Optional

from ..core import CheckGroup, rubric_check
from ..errors import StyleMismatch
from ..inliner import StyledTree

STYLESHEET_HREF_RE = re.compile(r"^(\./)?css/style\.css$")
FONT_STACK_RE = re.compile(
    r"'?Helvetica Neue'?,\s*'?Helvetica'?,\s*'?Arial'?,\s*sans-serif",
    re.IGNORECASE
)


def _require(condition: Any, message: str, expected: Optional[Any] = None, actual: Optional[Any] = None) -> None:
    if not condition:
        raise StyleMismatch(message, expected=expected, actual=actual)


def _require_value(actual: Optional[str], expected: str, what: str) -> None:
    _require(actual == expected, f"{what} is {actual!r}, expected {expected!r}", expected, actual)


# --- RUBRIC CHECKS ---

@rubric_check(code="STYLESHEET_LINK", description="Links in local stylesheet")
def check_stylesheet_link(tree: StyledTree) -> None:
    links = tree.select("head > link")
    _require(len(links) == 1, f"Expected exactly 1 <link> in <head>, found {len(links)}", 1, len(links))

    href = links[0].get("href") or ""
    _require(STYLESHEET_HREF_RE.match(href), f"Stylesheet link '{href}' does not reference css/style.css",
             "css/style.css", href)


@rubric_check(code="BODY_FONT_SIZE", description="Body has default font size")
def check_body_font_size(tree: StyledTree) -> None:
    _require_value(tree.css(tree.soup.body, "font-size"), "16px", "Body font-size")


@rubric_check(code="BODY_FONT_FAMILY", description="Body has default font family")
def check_body_font_family(tree: StyledTree) -> None:
    family = tree.css(tree.soup.body, "font-family") or ""
    normalized = family.replace('"', "'").strip()
    _require(FONT_STACK_RE.fullmatch(normalized), f"Body font-family is {family!r}",
             "'Helvetica Neue', Helvetica, Arial, sans-serif", family)


@rubric_check(code="PARAGRAPH_LINE_HEIGHT", description="Paragraphs have specified line height")
def check_paragraph_line_height(tree: StyledTree) -> None:
    paragraphs = tree.select("p")
    _require(paragraphs, "Document has no paragraphs", ">= 1 <p>", 0)

    for n, p in enumerate(paragraphs, start=1):
        _require_value(tree.css(p, "line-height"), "1.5", f"Line-height of paragraph {n}")
        _require(p.get("id") is None, f"Paragraph {n} has an id; style it through the p selector", None, p.get("id"))
        _require(p.get("class") is None, f"Paragraph {n} has a class; style it through the p selector",
                 None, p.get("class"))


@rubric_check(code="IMAGE_MAX_HEIGHT", description="Images have constrained height")
def check_image_max_height(tree: StyledTree) -> None:
    images = tree.select("img")
    _require(images, "Document has no images", ">= 1 <img>", 0)

    for n, img in enumerate(images, start=1):
        _require_value(tree.css(img, "max-height"), "400px", f"Max-height of image {n}")


@rubric_check(code="HIGHLIGHTED_ITEM", description="Important list item is colored")
def check_highlighted_item(tree: StyledTree) -> None:
    items = tree.select("li[class]")
    _require(len(items) == 1, f"Expected exactly 1 list item with a class, found {len(items)}", 1, len(items))

    # Only asserts that a color is defined, not that it differs from the surrounding text
    color = tree.css(items[0], "color")
    _require(color, "The highlighted list item has no color", "a color value", color)


# --- GROUP DEFINITION ---
DEFINITION = CheckGroup(
    category="STYLE",
    tree="inlined",
    checks=[
        check_stylesheet_link, check_body_font_size, check_body_font_family,
        check_paragraph_line_height, check_image_max_height, check_highlighted_item,
    ],
    order=2
)
