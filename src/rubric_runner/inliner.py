# src/rubric_runner/inliner.py
import asyncio
import logging
from typing import Dict, List, Optional, Tuple

import css_inline
import tinycss2
from bs4 import BeautifulSoup, Tag

from .errors import InlineError

logger = logging.getLogger(__name__)

Declaration = Tuple[str, str, bool]


def parse_declarations(content) -> List[Declaration]:
    """
    Parses a declaration list (tokens or a style attribute string)
    into (property, value, important) triples, in source order.
    """
    res = []
    for item in tinycss2.parse_declaration_list(content, skip_comments=True, skip_whitespace=True):
        if item.type != "declaration":
            continue
        value = tinycss2.serialize(item.value).strip()
        if value:
            res.append((item.lower_name, value, item.important))
    return res


def parse_style_attribute(style: Optional[str]) -> Dict[str, str]:
    """Maps property names to values for an inline style attribute; later entries win."""
    return {name: value for name, value, _ in parse_declarations(style or "")}


class StyleInliner:
    """
    Writes the document's stylesheet rules into per-element ``style`` attributes.

    Cascade resolution is done by css_inline. Linked stylesheets are resolved
    against ``base_url`` (a ``file://`` directory URL for submissions) and
    embedded ``<style>`` elements are applied as well.
    """

    def __init__(self, base_url: str, keep_link_tags: bool = True, load_remote_stylesheets: bool = True):
        self.base_url = base_url
        self.keep_link_tags = keep_link_tags
        self.load_remote_stylesheets = load_remote_stylesheets

    def inline(self, html: str) -> str:
        inliner = css_inline.CSSInliner(
            base_url=self.base_url,
            keep_link_tags=self.keep_link_tags,
            load_remote_stylesheets=self.load_remote_stylesheets,
        )
        try:
            markup = inliner.inline(html)
        except css_inline.InlineError as e:
            raise InlineError(f"Could not inline stylesheets (base {self.base_url}): {e}") from e

        logger.debug("Inlined stylesheets relative to %s", self.base_url)
        return markup


class StyledTree:
    """
    Queryable view of inlined markup.
    Computed values are read back from each element's style attribute.
    """

    def __init__(self, markup: str):
        self.markup = markup
        self.soup = BeautifulSoup(markup, "html5lib")

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    @staticmethod
    def css(element: Optional[Tag], prop: str) -> Optional[str]:
        """Returns the inlined value of a property, or None when undefined."""
        if element is None:
            return None
        return parse_style_attribute(element.get("style")).get(prop.lower())


async def inline_css(
        html: str,
        base_url: str,
        keep_link_tags: bool = True,
        load_remote_stylesheets: bool = True
) -> str:
    """Inlines the document's stylesheets in a worker thread."""
    inliner = StyleInliner(base_url, keep_link_tags, load_remote_stylesheets)
    return await asyncio.to_thread(inliner.inline, html)
