from skillbook.core.command_loader import CommandLoader
from skillbook.core.corpus import Corpus
from skillbook.core.readme import render_index, update_readme
from skillbook.core.skill_loader import SkillLoader
from skillbook.lint.base import LintReport
from skillbook.lint.registry import RuleRegistry
from skillbook.utils.config import Config


class SharedContext:
    """Global shared state for the application."""

    config: Config
    skill_loader: SkillLoader
    command_loader: CommandLoader
    rule_registry: RuleRegistry

    def __init__(self, config: Config):
        self.config = config
        self.skill_loader = SkillLoader.from_config(config)
        self.command_loader = CommandLoader.from_config(config)
        self.rule_registry = RuleRegistry.with_builtins()

    def scan(self) -> Corpus:
        return Corpus.scan(self.config)

    def lint(self) -> LintReport:
        """Lint the workspace using the configured rule selection."""
        return self.rule_registry.run_with_config(self.scan(), self.config.lint)

    def render_index(self) -> str:
        return render_index(
            self.skill_loader.discover_skills(), self.command_loader.discover_commands()
        )

    def write_index(self) -> bool:
        """
        Update the README index region in place.

        Returns:
            True if the README changed
        """
        readme_path = self.config.readme_path
        current = readme_path.read_text() if readme_path.exists() else ""
        updated = update_readme(current, self.render_index())
        if updated == current:
            return False
        readme_path.write_text(updated)
        return True
