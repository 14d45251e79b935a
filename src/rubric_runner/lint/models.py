# src/rubric_runner/lint/models.py
from typing import List, Optional, Union

from pydantic import BaseModel


class LintIssue(BaseModel):
    """A single violation reported by one of the linters."""
    rule: str
    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.rule}: {self.message}"
        return f"line {self.line}, col {self.column or 0} [{self.rule}] {self.message}"


class LintReport:
    """
    Outcome of linting both files of a submission.
    A linter call that raised is stored as its exception and re-raised on access.
    """

    def __init__(self, html: Union[List[LintIssue], BaseException], css: Union[List[LintIssue], BaseException]):
        self._results = {"html": html, "css": css}

    def issues(self, kind: str) -> List[LintIssue]:
        result = self._results[kind]
        if isinstance(result, BaseException):
            raise result
        return result
