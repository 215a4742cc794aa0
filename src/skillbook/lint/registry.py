"""Rule registry for managing and running lint rules."""

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable

from skillbook.lint.base import LintReport, Rule, Severity

if TYPE_CHECKING:
    from skillbook.core.corpus import Corpus
    from skillbook.utils.config import LintConfig

logger = logging.getLogger(__name__)


class UnknownRuleError(Exception):
    """Raised when a rule code or name is not registered."""

    def __init__(self, rule: str):
        super().__init__(f"Unknown lint rule: {rule}")
        self.rule = rule


class RuleRegistry:
    """Registry for lint rules, addressable by code or name."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}
        self._aliases: dict[str, str] = {}

    def register(self, rule: Rule) -> None:
        """Register a rule under its code, with its name as an alias."""
        self._rules[rule.code] = rule
        self._aliases[rule.code.lower()] = rule.code
        self._aliases[rule.name.lower()] = rule.code

    def resolve(self, key: str) -> Rule:
        """
        Look up a rule by code ("SB001") or name ("frontmatter-valid").

        Raises:
            UnknownRuleError: If nothing matches
        """
        code = self._aliases.get(key.strip().lower())
        if code is None:
            raise UnknownRuleError(key)
        return self._rules[code]

    def list_all(self) -> list[Rule]:
        return sorted(self._rules.values(), key=lambda r: r.code)

    def run(
        self,
        corpus: "Corpus",
        disabled: Iterable[str] = (),
        severity_overrides: dict[str, str] | None = None,
    ) -> LintReport:
        """
        Run every enabled rule over the corpus.

        Args:
            corpus: Snapshot to check
            disabled: Rule codes or names to skip
            severity_overrides: Rule code or name -> "error" | "warning"

        Returns:
            LintReport with all issues

        Raises:
            UnknownRuleError: If a disabled or overridden rule doesn't exist
        """
        skip = {self.resolve(key).code for key in disabled}
        overrides = {
            self.resolve(key).code: Severity(level)
            for key, level in (severity_overrides or {}).items()
        }

        report = LintReport(checked=len(corpus.documents))
        for rule in self.list_all():
            if rule.code in skip:
                logger.debug(f"Skipping disabled rule {rule.code}")
                continue
            for issue in rule.check(corpus):
                if rule.code in overrides:
                    issue = replace(issue, severity=overrides[rule.code])
                report.issues.append(issue)

        logger.info(
            f"Lint finished: {len(report.errors)} error(s), "
            f"{len(report.warnings)} warning(s) in {report.checked} document(s)"
        )
        return report

    def run_with_config(self, corpus: "Corpus", lint_config: "LintConfig") -> LintReport:
        return self.run(corpus, lint_config.disable, lint_config.severity)

    @classmethod
    def with_builtins(cls) -> "RuleRegistry":
        """Create registry with built-in rules registered."""
        from skillbook.lint.rules import BUILTIN_RULES

        registry = cls()
        for rule_cls in BUILTIN_RULES:
            registry.register(rule_cls())
        return registry
