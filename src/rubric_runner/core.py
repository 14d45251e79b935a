# src/rubric_runner/core.py
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, Field

from .lint.models import LintIssue

CATEGORIES = ("SYNTAX", "STRUCTURE", "STYLE")
TREES = ("source", "parsed", "inlined")


def rubric_check(code: str, description: str):
    """
    Decorator to declare the code and human-readable description of a rubric check.
    Facilitates auto-discovery by the RubricRegistry.
    """
    def decorator(func):
        func.check_code = code
        func.check_description = description
        return func
    return decorator


class CheckResult(BaseModel):
    """
    Outcome of a single rubric check.
    Lives only for the duration of a run; nothing is persisted.
    """
    code: str
    category: str
    description: str
    passed: bool

    # Failure information (empty when passed)
    message: str = ""
    expected: Optional[Any] = None
    actual: Optional[Any] = None
    details: List[LintIssue] = Field(default_factory=list)

    @property
    def status(self) -> str:
        return "PASS" if self.passed else "FAIL"

    def summary(self) -> str:
        """One-line representation used by the CLI and the pytest harness."""
        line = f"[{self.status}] {self.category} {self.code}: {self.description}"
        if not self.passed and self.message:
            line += f" -- {self.message}"
        return line


class CheckGroup:
    """
    Configuration object binding a category and the tree it reads
    to an ordered list of check functions.
    """

    def __init__(
            self,
            category: str,
            tree: str,
            checks: List[Callable[..., None]],
            order: int = 0
    ):
        if category not in CATEGORIES:
            raise ValueError(f"Unknown check category: {category}")
        if tree not in TREES:
            raise ValueError(f"Unknown tree: {tree}")

        self.category = category
        self.tree = tree
        self.checks = checks
        self.order = order

        missing = [c.__name__ for c in checks if not hasattr(c, "check_code")]
        if missing:
            raise ValueError(f"Checks without @rubric_check: {', '.join(missing)}")

        self.codes = [c.check_code for c in checks]
