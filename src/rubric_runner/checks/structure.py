# src/rubric_runner/checks/structure.py
import re
from typing import Any, Optional

from bs4 import BeautifulSoup

from ..core import CheckGroup, rubric_check
from ..errors import StructuralMismatch
from ..managers.config_manager import config_manager

IMAGE_SRC_RE = re.compile(r"^img/.+")
EXTERNAL_URL_RE = re.compile(r"^https?://\S+", re.IGNORECASE)


def _require(condition: Any, message: str, expected: Optional[Any] = None, actual: Optional[Any] = None) -> None:
    if not condition:
        raise StructuralMismatch(message, expected=expected, actual=actual)


def _require_count(found: int, expected: int, what: str) -> None:
    _require(found == expected, f"Expected exactly {expected} {what}, found {found}", expected, found)


def _require_at_least(found: int, minimum: int, what: str) -> None:
    _require(found >= minimum, f"Expected at least {minimum} {what}, found {found}", f">= {minimum}", found)


# --- RUBRIC CHECKS ---

@rubric_check(code="CHARSET", description="Specifies charset")
def check_charset(soup: BeautifulSoup) -> None:
    _require_count(len(soup.select("head > meta[charset]")), 1, "<meta charset> in <head>")


@rubric_check(code="TITLE", description="Includes page title")
def check_title(soup: BeautifulSoup) -> None:
    titles = soup.select("head > title")
    _require_count(len(titles), 1, "<title> in <head>")

    text = titles[0].get_text().strip()
    _require(text, "Title is empty", "non-empty text", "")

    placeholder = config_manager.settings.placeholders.title
    _require(text != placeholder, f"Title still uses the placeholder '{placeholder}'", f"not '{placeholder}'", text)


@rubric_check(code="AUTHOR", description="Includes author metadata")
def check_author(soup: BeautifulSoup) -> None:
    authors = soup.select('head > meta[name="author"]')
    _require_count(len(authors), 1, '<meta name="author"> in <head>')

    content = (authors[0].get("content") or "").strip()
    _require(content, "Author metadata has no content", "non-empty content", "")

    placeholder = config_manager.settings.placeholders.author
    _require(content != placeholder, f"Author still uses the placeholder '{placeholder}'",
             f"not '{placeholder}'", content)


@rubric_check(code="H1", description="Has a top-level heading")
def check_heading(soup: BeautifulSoup) -> None:
    headings = soup.find_all("h1")
    _require_count(len(headings), 1, "<h1>")
    _require(headings[0].get_text().strip(), "Top-level heading is empty", "non-empty text", "")


@rubric_check(code="IMAGE", description="Has an image")
def check_image(soup: BeautifulSoup) -> None:
    images = soup.find_all("img")
    _require_at_least(len(images), 1, "<img>")

    src = images[0].get("src") or ""
    _require(IMAGE_SRC_RE.match(src), f"Image source '{src}' is not a relative path into img/", "img/<file>", src)


@rubric_check(code="PARAGRAPH", description="Includes a paragraph")
def check_paragraph(soup: BeautifulSoup) -> None:
    paragraphs = soup.find_all("p")
    _require_at_least(len(paragraphs), 1, "<p>")
    _require(any(p.get_text().strip() for p in paragraphs), "Every paragraph is empty", "non-empty text", "")


@rubric_check(code="PARAGRAPH_LINK", description="Includes a hyperlink in the paragraph")
def check_paragraph_link(soup: BeautifulSoup) -> None:
    anchors = soup.select("p a")
    _require_at_least(len(anchors), 1, "<a> inside a <p>")

    href = anchors[0].get("href") or ""
    _require(EXTERNAL_URL_RE.match(href), f"Link target '{href}' is not an external http(s) URL",
             "http(s)://...", href)


@rubric_check(code="LIST", description="Includes a list")
def check_list(soup: BeautifulSoup) -> None:
    _require_at_least(len(soup.select("ul, ol")), 1, "<ul> or <ol>")


@rubric_check(code="LIST_ITEMS", description="List has at least 3 items")
def check_list_items(soup: BeautifulSoup) -> None:
    # The first list in document order, not any list that happens to qualify
    first = soup.select_one("ul, ol")
    _require(first is not None, "Document has no list", "<ul> or <ol>", None)

    items = first.find_all("li", recursive=False)
    _require_at_least(len(items), 3, f"<li> children in the first <{first.name}>")

    empty = [n for n, item in enumerate(items, start=1) if not item.get_text().strip()]
    _require(not empty, f"List item(s) {', '.join(map(str, empty))} are empty", 0, len(empty))


# --- GROUP DEFINITION ---
DEFINITION = CheckGroup(
    category="STRUCTURE",
    tree="parsed",
    checks=[
        check_charset, check_title, check_author, check_heading, check_image,
        check_paragraph, check_paragraph_link, check_list, check_list_items,
    ],
    order=1
)
