"""Lint rules for skill and command corpora."""

from skillbook.lint.base import LintIssue, LintReport, Rule, Severity
from skillbook.lint.registry import RuleRegistry, UnknownRuleError

__all__ = [
    "LintIssue",
    "LintReport",
    "Rule",
    "RuleRegistry",
    "Severity",
    "UnknownRuleError",
]
