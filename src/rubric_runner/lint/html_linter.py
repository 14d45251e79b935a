# src/rubric_runner/lint/html_linter.py
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import html5lib
from bs4 import BeautifulSoup, Doctype, Tag
from html5lib.constants import E as HTML5_ERRORS

from .models import LintIssue

logger = logging.getLogger(__name__)

LintRule = Callable[["HtmlLintContext", Any], List[LintIssue]]
_RULES: Dict[str, LintRule] = {}

DEFAULT_OPTIONS: Dict[str, Any] = {
    "html-valid": True,
    "attr-bans": [
        "align", "background", "bgcolor", "border", "frameborder", "longdesc",
        "marginwidth", "marginheight", "scrolling", "style", "width",
    ],
    "attr-no-dup": True,
    "doctype-first": False,
    "doctype-html5": False,
    "html-req-lang": False,
    "id-no-dup": True,
    "img-req-alt": True,
    "tag-name-lowercase": True,
}

# Formatting rules the linter does not implement; they may only be switched off
FORMATTING_OPTIONS = {
    "attr-name-style", "id-class-style", "indent-style", "indent-width",
    "line-end-style", "line-no-trailing-whitespace",
}

# Foreign (SVG) elements whose names are camel-case by definition
SVG_CAMEL_CASE_TAGS = {
    "altGlyph", "altGlyphDef", "altGlyphItem", "animateColor", "animateMotion", "animateTransform",
    "clipPath", "feBlend", "feColorMatrix", "feComponentTransfer", "feComposite", "feConvolveMatrix",
    "feDiffuseLighting", "feDisplacementMap", "feDistantLight", "feDropShadow", "feFlood", "feFuncA",
    "feFuncB", "feFuncG", "feFuncR", "feGaussianBlur", "feImage", "feMerge", "feMergeNode",
    "feMorphology", "feOffset", "fePointLight", "feSpecularLighting", "feSpotLight", "feTile",
    "feTurbulence", "foreignObject", "glyphRef", "linearGradient", "radialGradient", "textPath",
}

COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
START_TAG_RE = re.compile(r"<([A-Za-z][A-Za-z0-9:-]*)((?:[^>\"']|\"[^\"]*\"|'[^']*')*)>")
END_TAG_RE = re.compile(r"</([A-Za-z][A-Za-z0-9:-]*)\s*>")
ATTR_NAME_RE = re.compile(r"([^\s=/>\"']+)(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s>]+))?")


def lint_rule(name: str):
    """Registers a rule function under its option name."""
    def decorator(func: LintRule) -> LintRule:
        _RULES[name] = func
        return func
    return decorator


def _blank_comments(text: str) -> str:
    """Replaces comments by whitespace of equal length so offsets stay valid."""
    return COMMENT_RE.sub(lambda m: re.sub(r"[^\n]", " ", m.group(0)), text)


class HtmlLintContext:
    """
    Parsed views of one HTML document shared by all rules.
    Built once per lint call.
    """

    def __init__(self, text: str):
        self.text = text
        self.markup = _blank_comments(text)
        self.duplicate_attrs: List[Tuple[str, str, int, int]] = []
        self._pending_dups: List[str] = []

        def on_duplicate(attrs: Dict[str, Any], key: str, value: Any) -> None:
            self._pending_dups.append(key)

        self.soup = BeautifulSoup(text, "html.parser", on_duplicate_attribute=on_duplicate)
        if self._pending_dups:
            self._collect_duplicates()

    def _collect_duplicates(self) -> None:
        """Maps recorded duplicate attribute names back to their raw start tags."""
        for match in START_TAG_RE.finditer(self.markup):
            names = [n.lower() for n in ATTR_NAME_RE.findall(match.group(2))]
            for name, count in Counter(names).items():
                if count > 1:
                    line, col = self.position(match.start())
                    self.duplicate_attrs.append((match.group(1), name, line, col))

    def position(self, offset: int) -> Tuple[int, int]:
        """Converts a character offset into a 1-based (line, column) pair."""
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return line, column

    def tags(self) -> List[Tag]:
        return self.soup.find_all(True)


def _issue(rule: str, message: str, tag: Optional[Tag] = None,
           line: Optional[int] = None, column: Optional[int] = None) -> LintIssue:
    if tag is not None:
        line = getattr(tag, "sourceline", None)
        pos = getattr(tag, "sourcepos", None)
        column = pos + 1 if pos is not None else None
    return LintIssue(rule=rule, message=message, line=line, column=column)


# --- RULES ---

@lint_rule("html-valid")
def check_html_valid(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    """Reports the parse errors of a spec-compliant HTML5 parser."""
    parser = html5lib.HTMLParser(strict=False)
    parser.parse(ctx.text)

    res = []
    for (line, col), code, datavars in parser.errors:
        try:
            message = HTML5_ERRORS.get(code, code) % (datavars or {})
        except (KeyError, TypeError, ValueError):
            message = code
        res.append(LintIssue(rule="html-valid", message=message, line=line, column=col))
    return res


@lint_rule("doctype-first")
def check_doctype_first(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    """The doctype must come first, ignoring whitespace and comments."""
    head = ctx.markup.lstrip("\ufeff").lstrip()
    if not head.lower().startswith("<!doctype"):
        return [LintIssue(rule="doctype-first", message="Doctype is not the first element", line=1, column=1)]
    return []


@lint_rule("doctype-html5")
def check_doctype_html5(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    """A present doctype must be the HTML5 one."""
    for item in ctx.soup.contents:
        if isinstance(item, Doctype):
            declared = re.sub(r"^doctype\s*", "", item.strip(), flags=re.IGNORECASE)
            if declared.lower() != "html":
                return [_issue("doctype-html5", f"Doctype is not HTML5: <!DOCTYPE {declared}>", line=1, column=1)]
            break
    return []


@lint_rule("html-req-lang")
def check_html_lang(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    html = ctx.soup.find("html")
    if html is None or not (html.get("lang") or "").strip():
        return [_issue("html-req-lang", "The <html> tag has no lang attribute", tag=html)]
    return []


@lint_rule("attr-bans")
def check_attr_bans(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    banned = {a.lower() for a in (option or [])}
    res = []
    for tag in ctx.tags():
        for attr in tag.attrs:
            if attr.lower() in banned:
                res.append(_issue("attr-bans", f"Attribute '{attr}' is banned (on <{tag.name}>)", tag=tag))
    return res


@lint_rule("attr-no-dup")
def check_attr_no_dup(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    return [
        LintIssue(rule="attr-no-dup", message=f"Duplicate attribute '{name}' on <{tag}>", line=line, column=col)
        for tag, name, line, col in ctx.duplicate_attrs
    ]


@lint_rule("id-no-dup")
def check_id_no_dup(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    seen: Dict[str, Tag] = {}
    res = []
    for tag in ctx.soup.find_all(id=True):
        value = tag["id"]
        if value in seen:
            res.append(_issue("id-no-dup", f"Duplicate id '{value}'", tag=tag))
        else:
            seen[value] = tag
    return res


@lint_rule("img-req-alt")
def check_img_alt(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    res = []
    for img in ctx.soup.find_all("img"):
        alt = img.get("alt")
        if alt is None:
            res.append(_issue("img-req-alt", "Image has no alt attribute", tag=img))
        elif option != "allownull" and not alt.strip():
            res.append(_issue("img-req-alt", "Image has an empty alt attribute", tag=img))
    return res


@lint_rule("tag-name-lowercase")
def check_tag_lowercase(ctx: HtmlLintContext, option: Any) -> List[LintIssue]:
    res = []
    for regex in (START_TAG_RE, END_TAG_RE):
        for match in regex.finditer(ctx.markup):
            name = match.group(1)
            if name != name.lower() and name not in SVG_CAMEL_CASE_TAGS:
                line, col = ctx.position(match.start())
                res.append(LintIssue(rule="tag-name-lowercase", message=f"Tag name '{name}' is not lowercase",
                                     line=line, column=col))
    return res


class HtmlLinter:
    """
    Configurable HTML linter.

    Options are keyed by rule name; ``False`` disables a rule and any other
    value is handed to the rule as its argument.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = dict(DEFAULT_OPTIONS)
        for name, value in (options or {}).items():
            if name in FORMATTING_OPTIONS:
                if value is not False and value is not None:
                    logger.warning("Formatting rule %s is not supported; ignoring it", name)
                continue
            if name not in _RULES:
                logger.warning("Ignoring unknown HTML lint option: %s", name)
                continue
            self.options[name] = value

    @property
    def active_rules(self) -> List[str]:
        return [name for name, value in self.options.items() if value is not False and value is not None]

    def lint(self, text: str) -> List[LintIssue]:
        """Lints HTML text and returns every issue, ordered by position."""
        ctx = HtmlLintContext(text)
        issues: List[LintIssue] = []
        for name in self.active_rules:
            issues.extend(_RULES[name](ctx, self.options[name]))

        issues.sort(key=lambda i: (i.line or 0, i.column or 0))
        logger.debug("HTML lint finished with %d issue(s)", len(issues))
        return issues

    def lint_file(self, path: Union[str, Path]) -> List[LintIssue]:
        with open(path, "r", encoding="utf-8") as f:
            return self.lint(f.read())
