# tests/test_runner.py
from unittest.mock import patch

import pytest

from rubric_runner import RubricRunner, load_submission
from rubric_runner.errors import SubmissionError
from rubric_runner.registry import RubricRegistry

EXPECTED_CODES = [
    "HTML_VALID", "CSS_VALID",
    "CHARSET", "TITLE", "AUTHOR", "H1", "IMAGE", "PARAGRAPH", "PARAGRAPH_LINK", "LIST", "LIST_ITEMS",
    "STYLESHEET_LINK", "BODY_FONT_SIZE", "BODY_FONT_FAMILY", "PARAGRAPH_LINE_HEIGHT",
    "IMAGE_MAX_HEIGHT", "HIGHLIGHTED_ITEM",
]


@pytest.fixture
def runner():
    return RubricRunner()


def test_registry_discovers_groups_in_order():
    """De registry vindt syntax-, structuur- en stijlchecks in die volgorde."""
    RubricRegistry.discover()
    assert [g.category for g in RubricRegistry.get_groups()] == ["SYNTAX", "STRUCTURE", "STYLE"]
    assert RubricRegistry.get_all_codes() == EXPECTED_CODES


def test_valid_submission_passes(runner, make_submission):
    report = runner.run_directory(make_submission())
    assert [r.code for r in report.results] == EXPECTED_CODES
    assert report.passed, "\n".join(r.summary() for r in report.results if not r.passed)
    assert report.failed_count == 0


def test_run_is_idempotent(runner, make_submission):
    """Twee runs op dezelfde bestanden geven identieke uitkomsten."""
    submission = load_submission(make_submission())
    first = runner.run_sync(submission)
    second = runner.run_sync(submission)
    assert [(r.code, r.passed, r.message) for r in first.results] == \
           [(r.code, r.passed, r.message) for r in second.results]
    assert first.digest == second.digest == submission.digest


def test_both_trees_come_from_the_loaded_document(runner, make_submission):
    """Geparste en ge-inlinede boom worden uit exact dezelfde tekst gebouwd."""
    submission = load_submission(make_submission())
    seen = []

    import rubric_runner.runner as runner_module
    real_soup, real_inline = runner_module.BeautifulSoup, runner_module.inline_css

    def spy_soup(markup, *args, **kwargs):
        seen.append(markup)
        return real_soup(markup, *args, **kwargs)

    async def spy_inline(html, *args, **kwargs):
        seen.append(html)
        return await real_inline(html, *args, **kwargs)

    with patch.object(runner_module, "BeautifulSoup", spy_soup), \
            patch.object(runner_module, "inline_css", spy_inline):
        runner.run_sync(submission)

    assert seen == [submission.html, submission.html]


def test_failures_are_independent(runner, make_submission, valid_html):
    """Eén falende check houdt de andere niet tegen."""
    html = valid_html.replace("Compilers and Moths</title>", "My Page Title</title>")
    report = runner.run_directory(make_submission(html=html))

    assert not report.passed
    assert [r.code for r in report.results if not r.passed] == ["TITLE"]
    assert report.get("TITLE").actual == "My Page Title"
    assert report.passed_count == len(EXPECTED_CODES) - 1


def test_syntax_errors_are_listed_individually(runner, make_submission, valid_html):
    html = valid_html.replace("<img src", '<img width="10" height="10" src')
    result = runner.run_directory(make_submission(html=html)).get("HTML_VALID")

    assert not result.passed
    assert result.category == "SYNTAX"
    assert len(result.details) == 2
    assert result.expected == 0 and result.actual == 2


def test_inliner_failure_fails_style_group_only(runner, make_submission, valid_html):
    """Als inlinen mislukt falen alleen de stijlchecks."""
    html = valid_html.replace("</head>", '<link rel="stylesheet" href="css/missing.css"></head>')
    report = runner.run_directory(make_submission(html=html))

    style_results = [r for r in report.results if r.category == "STYLE"]
    assert style_results and all(not r.passed for r in style_results)
    assert all("inlined tree unavailable" in r.message for r in style_results)
    assert all(r.passed for r in report.results if r.category == "STRUCTURE")


def test_style_element_rules_are_inlined(runner, make_submission, valid_html):
    """Regels uit een style-element tellen mee voor de stijlchecks."""
    html = valid_html.replace("</head>", "<style>body { font-size: 16px; }</style></head>")
    css = "p { line-height: 1.5; }"
    report = runner.run_directory(make_submission(html=html, css=css))

    assert report.get("BODY_FONT_SIZE").passed
    assert report.get("PARAGRAPH_LINE_HEIGHT").passed
    assert not report.get("BODY_FONT_FAMILY").passed


def test_linter_crash_fails_only_that_file(runner, make_submission):
    with patch("rubric_runner.lint.CssLinter.lint", side_effect=RuntimeError("boom")):
        report = runner.run_directory(make_submission())

    assert not report.get("CSS_VALID").passed
    assert "boom" in report.get("CSS_VALID").message
    assert report.get("HTML_VALID").passed


def test_unexpected_check_error_is_contained(runner, make_submission):
    submission = load_submission(make_submission())
    with patch("rubric_runner.checks.structure.config_manager", None):
        report = runner.run_sync(submission)

    assert not report.get("TITLE").passed
    assert report.get("TITLE").message.startswith("Unexpected error")
    assert report.get("H1").passed


def test_missing_files_raise(tmp_path):
    with pytest.raises(SubmissionError):
        load_submission(tmp_path / "nope")
    (tmp_path / "index.html").write_text("<p>hi</p>", encoding="utf-8")
    with pytest.raises(SubmissionError, match="style.css"):
        load_submission(tmp_path)


def test_submission_is_frozen(make_submission):
    submission = load_submission(make_submission())
    with pytest.raises(Exception):
        submission.html = "<p>changed</p>"


def test_base_url_points_at_directory(make_submission):
    submission = load_submission(make_submission())
    assert submission.base_url.startswith("file://")
    assert submission.base_url.endswith("/submission/")
