# tests/test_cli.py
import logging

from rubric_runner.cli import main


def test_cli_passing_submission(make_submission, capsys):
    """Een goede inzending geeft exitcode 0 en alleen PASS-regels."""
    exit_code = main([str(make_submission())])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "[FAIL]" not in out
    assert "17 passed, 0 failed" in out


def test_cli_failing_submission(make_submission, valid_css, capsys):
    root = make_submission(css=valid_css.replace("16px", "14px"))
    exit_code = main([str(root)])
    out = capsys.readouterr().out

    assert exit_code == 1
    assert "[FAIL] STYLE BODY_FONT_SIZE" in out


def test_cli_multiple_directories_and_missing_one(make_submission, tmp_path, capsys):
    good = make_submission(name="good")
    exit_code = main([str(good), str(tmp_path / "missing")])
    out = capsys.readouterr().out

    assert exit_code == 1
    assert out.count("== ") == 1


def test_cli_lists_lint_issues(make_submission, valid_html, capsys):
    root = make_submission(html=valid_html.replace("<p>", '<p style="color: red">'))
    main([str(root)])
    out = capsys.readouterr().out
    assert "[attr-bans]" in out


def teardown_module(module):
    # main() replaces the root handlers; hand logging back to pytest's defaults
    logging.getLogger().handlers.clear()
