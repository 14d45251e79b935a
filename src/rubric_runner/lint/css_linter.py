# src/rubric_runner/lint/css_linter.py
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import tinycss2

from .models import LintIssue

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS: Dict[str, Any] = {
    "errors": True,
    "empty-values": True,
    "unknown-at-rules": False,
}

KNOWN_AT_RULES = {
    "charset", "import", "namespace", "media", "supports", "font-face", "keyframes",
    "page", "layer", "container", "property", "counter-style", "font-feature-values",
}


def _issue(rule: str, message: str, node: Any) -> LintIssue:
    return LintIssue(
        rule=rule,
        message=message,
        line=getattr(node, "source_line", None),
        column=getattr(node, "source_column", None),
    )


class CssLinter:
    """
    Lints a stylesheet with tinycss2.
    Only errors are reported; stylistic warnings are not part of the rule set.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = dict(DEFAULT_OPTIONS)
        for name, value in (options or {}).items():
            if name not in DEFAULT_OPTIONS:
                logger.warning("Ignoring unknown CSS lint option: %s", name)
                continue
            self.options[name] = value

    def _enabled(self, name: str) -> bool:
        return bool(self.options.get(name))

    def lint(self, text: str) -> List[LintIssue]:
        """Lints stylesheet text and returns every issue, ordered by position."""
        rules = tinycss2.parse_stylesheet(text, skip_comments=True, skip_whitespace=True)
        issues = self._lint_rules(rules)

        issues.sort(key=lambda i: (i.line or 0, i.column or 0))
        logger.debug("CSS lint finished with %d issue(s)", len(issues))
        return issues

    def lint_file(self, path: Union[str, Path]) -> List[LintIssue]:
        with open(path, "r", encoding="utf-8") as f:
            return self.lint(f.read())

    def _lint_rules(self, rules: List[Any]) -> List[LintIssue]:
        res = []
        for rule in rules:
            if rule.type == "error":
                if self._enabled("errors"):
                    res.append(_issue("errors", f"Parse error: {rule.message}", rule))

            elif rule.type == "qualified-rule":
                if self._enabled("errors") and not tinycss2.serialize(rule.prelude).strip():
                    res.append(_issue("errors", "Rule has no selector", rule))
                res.extend(self._lint_declarations(rule.content))

            elif rule.type == "at-rule":
                res.extend(self._lint_at_rule(rule))
        return res

    def _lint_at_rule(self, rule: Any) -> List[LintIssue]:
        res = []
        keyword = rule.lower_at_keyword
        if self._enabled("unknown-at-rules") and keyword not in KNOWN_AT_RULES:
            res.append(_issue("unknown-at-rules", f"Unknown at-rule @{rule.at_keyword}", rule))

        if rule.content is None:
            return res

        if keyword in ("media", "supports", "layer", "container"):
            nested = tinycss2.parse_rule_list(rule.content, skip_comments=True, skip_whitespace=True)
            res.extend(self._lint_rules(nested))
        elif keyword in ("font-face", "page", "property", "counter-style"):
            res.extend(self._lint_declarations(rule.content))
        return res

    def _lint_declarations(self, content: Optional[List[Any]]) -> List[LintIssue]:
        res = []
        if content is None:
            return res

        for item in tinycss2.parse_blocks_contents(content, skip_comments=True, skip_whitespace=True):
            if item.type == "error":
                if self._enabled("errors"):
                    res.append(_issue("errors", f"Invalid declaration: {item.message}", item))
            elif item.type == "declaration":
                if self._enabled("empty-values") and not tinycss2.serialize(item.value).strip():
                    res.append(_issue("empty-values", f"Property '{item.name}' has no value", item))
            elif item.type == "qualified-rule":
                # Nested rule (CSS nesting)
                res.extend(self._lint_declarations(item.content))
        return res
