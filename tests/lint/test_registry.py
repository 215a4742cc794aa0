"""Tests for RuleRegistry."""

from pathlib import Path

import pytest

from skillbook.core.corpus import Corpus
from skillbook.lint.base import LintIssue, Rule, Severity
from skillbook.lint.registry import RuleRegistry, UnknownRuleError
from skillbook.utils.config import LintConfig


class MockRule(Rule):
    """Mock rule for testing."""

    code = "XX001"
    name = "mock-rule"
    description = "Always complains"

    def check(self, corpus):
        yield LintIssue(self.code, self.default_severity, Path("a.md"), "mock")


class TestRuleRegistry:
    """Tests for RuleRegistry."""

    @pytest.mark.parametrize("key", ["XX001", "xx001", "mock-rule", " MOCK-RULE "])
    def test_resolve_by_code_or_name(self, key):
        """Rules resolve by code or name, ignoring case and spaces."""
        registry = RuleRegistry()
        registry.register(MockRule())

        assert registry.resolve(key).code == "XX001"

    def test_resolve_unknown(self):
        """Unknown keys raise UnknownRuleError."""
        with pytest.raises(UnknownRuleError) as exc:
            RuleRegistry().resolve("nope")

        assert exc.value.rule == "nope"

    def test_with_builtins_registers_all_rules(self):
        """All thirteen built-in rules are registered in code order."""
        registry = RuleRegistry.with_builtins()

        codes = [rule.code for rule in registry.list_all()]
        assert codes == [f"SB{n:03d}" for n in range(1, 14)]

    def test_run_collects_issues(self, test_config):
        """run() gathers issues from every rule."""
        registry = RuleRegistry()
        registry.register(MockRule())

        report = registry.run(Corpus.scan(test_config))

        assert [i.message for i in report.issues] == ["mock"]
        assert not report.ok

    def test_run_skips_disabled(self, test_config):
        """Disabled rules are not run."""
        registry = RuleRegistry()
        registry.register(MockRule())

        report = registry.run(Corpus.scan(test_config), disabled=["mock-rule"])

        assert report.issues == []

    def test_run_applies_severity_override(self, test_config):
        """Severity overrides replace the rule default."""
        registry = RuleRegistry()
        registry.register(MockRule())

        report = registry.run(
            Corpus.scan(test_config), severity_overrides={"XX001": "warning"}
        )

        assert report.issues[0].severity is Severity.WARNING
        assert report.ok
        assert report.exit_code() == 0
        assert report.exit_code(warnings_as_errors=True) == 1

    def test_run_with_unknown_disabled_rule(self, test_config):
        """Disabling an unknown rule raises."""
        with pytest.raises(UnknownRuleError):
            RuleRegistry.with_builtins().run(Corpus.scan(test_config), disabled=["SB999"])

    def test_run_with_config(self, test_config, write_skill):
        """run_with_config applies LintConfig settings."""
        write_skill("testing", "x", name="Not_Kebab")
        registry = RuleRegistry.with_builtins()
        corpus = Corpus.scan(test_config)

        report = registry.run_with_config(
            corpus, LintConfig(disable=["SB012"], severity={"skill-name-format": "warning"})
        )

        assert {i.rule for i in report.issues} == {"SB003"}
        assert report.warnings and not report.errors


class TestCleanCorpus:
    """End-to-end check of the built-in rules."""

    def test_builtin_rules_pass_on_clean_corpus(
        self, test_config, write_skill, write_command
    ):
        """A well-formed corpus with README produces no issues."""
        write_skill("review", "code-reviewer-pro")
        write_skill("security", "security-audit")
        write_command("review")
        test_config.readme_path.write_text(
            "# Corpus\n\n| Command | Notes |\n|---|---|\n"
            "| `/review` | Uses: code-reviewer-pro, security-audit |\n"
        )

        report = RuleRegistry.with_builtins().run(Corpus.scan(test_config))

        assert report.issues == []
        assert report.checked == 3
