# src/rubric_runner/__init__.py
from .core import CheckResult
from .runner import RubricReport, RubricRunner
from .submission import Submission, load_submission

__all__ = ["CheckResult", "RubricReport", "RubricRunner", "Submission", "load_submission"]
