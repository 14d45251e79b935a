# src/rubric_runner/lint/__init__.py
import asyncio
from typing import Any, Dict, List, Optional

from .css_linter import CssLinter
from .html_linter import HtmlLinter
from .models import LintIssue, LintReport

__all__ = ["CssLinter", "HtmlLinter", "LintIssue", "LintReport", "lint_css_async", "lint_html_async"]


async def lint_html_async(text: str, options: Optional[Dict[str, Any]] = None) -> List[LintIssue]:
    """Lints HTML text in a worker thread so the event loop stays responsive."""
    return await asyncio.to_thread(HtmlLinter(options).lint, text)


async def lint_css_async(text: str, options: Optional[Dict[str, Any]] = None) -> List[LintIssue]:
    """Lints CSS text in a worker thread so the event loop stays responsive."""
    return await asyncio.to_thread(CssLinter(options).lint, text)
