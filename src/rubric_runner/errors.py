# src/rubric_runner/errors.py
from typing import Any, List, Optional

from .lint.models import LintIssue


class RubricError(Exception):
    """
    Base class for a failed rubric assertion.
    Carries the expected and actual values so reports can show the mismatch.
    """

    def __init__(self, message: str, expected: Optional[Any] = None, actual: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.expected = expected
        self.actual = actual


class SyntaxViolation(RubricError):
    """The linter reported errors for a source file."""

    def __init__(self, message: str, issues: List[LintIssue]):
        super().__init__(message, expected=0, actual=len(issues))
        self.issues = issues


class StructuralMismatch(RubricError):
    """A required element, attribute or content constraint is not met."""


class StyleMismatch(RubricError):
    """A computed style value differs from the required value or pattern."""


class SubmissionError(Exception):
    """The submission files could not be loaded."""


class InlineError(Exception):
    """A stylesheet referenced by the document could not be resolved."""
