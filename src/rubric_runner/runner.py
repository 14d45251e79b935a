# src/rubric_runner/runner.py
import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field

from .core import CheckGroup, CheckResult
from .errors import RubricError, SyntaxViolation
from .inliner import StyledTree, inline_css
from .lint import lint_css_async, lint_html_async
from .lint.models import LintReport
from .managers.config_manager import config_manager
from .registry import RubricRegistry
from .submission import Submission, load_submission

logger = logging.getLogger(__name__)


class RubricReport(BaseModel):
    """All check results for one submission. The run passes only if every check passes."""
    directory: str
    digest: str
    results: List[CheckResult] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return len(self.results) - self.passed_count

    def get(self, code: str) -> Optional[CheckResult]:
        return next((r for r in self.results if r.code == code), None)


class RubricRunner:
    """
    Rubric Runner.

    Lints the source files, builds the parsed and the inlined tree from the
    same document text, and evaluates every registered check independently.
    A failing check never prevents the others from running.
    """

    def __init__(
            self,
            html_lint_options: Optional[Dict[str, Any]] = None,
            css_lint_options: Optional[Dict[str, Any]] = None,
            keep_link_tags: Optional[bool] = None
    ):
        RubricRegistry.discover()
        self.groups = RubricRegistry.get_groups()

        self.html_lint_options = html_lint_options if html_lint_options is not None \
            else config_manager.settings.lint.html
        self.css_lint_options = css_lint_options if css_lint_options is not None \
            else config_manager.settings.lint.css
        self.keep_link_tags = keep_link_tags if keep_link_tags is not None \
            else config_manager.settings.inliner.keep_link_tags
        self.load_remote_stylesheets = config_manager.settings.inliner.load_remote_stylesheets

    async def run(self, submission: Submission) -> RubricReport:
        """
        Runs the full rubric on a loaded submission.

        Args:
            submission (Submission): The document and stylesheet to grade.

        Returns:
            RubricReport: One CheckResult per registered check, in order.
        """
        html_issues, css_issues, inlined = await asyncio.gather(
            lint_html_async(submission.html, self.html_lint_options),
            lint_css_async(submission.css, self.css_lint_options),
            inline_css(
                submission.html,
                submission.base_url,
                keep_link_tags=self.keep_link_tags,
                load_remote_stylesheets=self.load_remote_stylesheets
            ),
            return_exceptions=True
        )

        targets: Dict[str, Any] = {
            "source": LintReport(html=html_issues, css=css_issues),
            "parsed": BeautifulSoup(submission.html, "html5lib"),
            "inlined": inlined if isinstance(inlined, BaseException) else StyledTree(inlined),
        }

        results = []
        for group in self.groups:
            target = targets[group.tree]
            if isinstance(target, BaseException):
                logger.error("Preparing the %s tree failed: %s", group.tree, target)
                results.extend(self._fail_group(group, target))
                continue

            for check in group.checks:
                results.append(self._evaluate(group, check, target))

        report = RubricReport(directory=str(submission.directory), digest=submission.digest, results=results)
        logger.info(
            "Rubric finished for %s: %d passed, %d failed",
            submission.directory, report.passed_count, report.failed_count
        )
        return report

    def run_sync(self, submission: Submission) -> RubricReport:
        return asyncio.run(self.run(submission))

    def run_directory(self, directory: Union[str, Path]) -> RubricReport:
        """Loads the submission in ``directory`` and runs the rubric on it."""
        return self.run_sync(load_submission(directory))

    @staticmethod
    def _result(group: CheckGroup, check: Callable, **kwargs: Any) -> CheckResult:
        return CheckResult(
            code=check.check_code,
            category=group.category,
            description=check.check_description,
            **kwargs
        )

    def _evaluate(self, group: CheckGroup, check: Callable, target: Any) -> CheckResult:
        try:
            check(target)
        except SyntaxViolation as e:
            return self._result(group, check, passed=False, message=e.message,
                                expected=e.expected, actual=e.actual, details=e.issues)
        except RubricError as e:
            return self._result(group, check, passed=False, message=e.message,
                                expected=e.expected, actual=e.actual)
        except Exception as e:
            logger.error("Check %s raised an unexpected error: %s", check.check_code, e, exc_info=True)
            return self._result(group, check, passed=False, message=f"Unexpected error: {e}")

        logger.debug("Check %s passed", check.check_code)
        return self._result(group, check, passed=True)

    def _fail_group(self, group: CheckGroup, error: BaseException) -> List[CheckResult]:
        return [
            self._result(group, check, passed=False, message=f"{group.tree} tree unavailable: {error}")
            for check in group.checks
        ]
