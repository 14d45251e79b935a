# src/rubric_runner/cli.py
import argparse
import logging
import sys
from typing import List, Optional

from tqdm import tqdm

from .errors import SubmissionError
from .managers.config_manager import config_manager
from .runner import RubricReport, RubricRunner
from .utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def _print_report(report: RubricReport) -> None:
    tqdm.write(f"== {report.directory}")
    for result in report.results:
        tqdm.write(result.summary())
        for issue in result.details:
            tqdm.write(f"    {issue}")
    tqdm.write(f"{report.passed_count} passed, {report.failed_count} failed")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rubric-runner",
        description="Checks static HTML/CSS submissions against the page rubric."
    )
    parser.add_argument("directories", nargs="+", help="Submission directories (holding index.html and css/)")
    args = parser.parse_args(argv)

    configure_logger(
        general_level=config_manager.settings.debug.level,
        module_specific_levels=config_manager.settings.debug.module_levels,
        silenced_loggers=config_manager.settings.debug.silenced_loggers
    )

    runner = RubricRunner()
    exit_code = 0
    for directory in tqdm(args.directories, desc="Grading", unit="submission", disable=len(args.directories) < 2):
        try:
            report = runner.run_directory(directory)
        except SubmissionError as e:
            logger.error("Skipping %s: %s", directory, e)
            exit_code = 1
            continue

        _print_report(report)
        if not report.passed:
            exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
