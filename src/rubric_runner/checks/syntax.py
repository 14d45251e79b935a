# src/rubric_runner/checks/syntax.py
from typing import List

from ..core import CheckGroup, rubric_check
from ..errors import SyntaxViolation
from ..lint.models import LintIssue, LintReport


def _require_clean(kind: str, issues: List[LintIssue]) -> None:
    if issues:
        listing = "; ".join(str(issue) for issue in issues)
        raise SyntaxViolation(f"{len(issues)} {kind} lint error(s): {listing}", issues)


# --- RUBRIC CHECKS ---

@rubric_check(code="HTML_VALID", description="HTML validates without errors")
def check_html_valid(report: LintReport) -> None:
    _require_clean("HTML", report.issues("html"))


@rubric_check(code="CSS_VALID", description="CSS validates without errors")
def check_css_valid(report: LintReport) -> None:
    _require_clean("CSS", report.issues("css"))


# --- GROUP DEFINITION ---
DEFINITION = CheckGroup(
    category="SYNTAX",
    tree="source",
    checks=[check_html_valid, check_css_valid],
    order=0
)
