"""Base classes for lint rules."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from skillbook.core.corpus import Corpus, Document


class Severity(str, Enum):
    """How serious a lint finding is."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class LintIssue:
    """A single finding produced by a rule."""

    rule: str
    severity: Severity
    path: Path | None
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.path is None:
            return "<corpus>"
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def __str__(self) -> str:
        return f"{self.location()}: {self.rule} [{self.severity.value}] {self.message}"


@dataclass
class LintReport:
    """Result of running a set of rules over a corpus."""

    issues: list[LintIssue] = field(default_factory=list)
    checked: int = 0  # number of documents looked at

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def exit_code(self, warnings_as_errors: bool = False) -> int:
        if self.errors or (warnings_as_errors and self.warnings):
            return 1
        return 0

    def sorted(self) -> list[LintIssue]:
        """Issues ordered by file, then line, then rule code."""
        return sorted(
            self.issues,
            key=lambda i: (str(i.path or ""), i.line or 0, i.rule),
        )


class Rule(ABC):
    """Base class for lint rules."""

    code: str
    name: str
    description: str = ""
    default_severity: Severity = Severity.ERROR

    @abstractmethod
    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        """Yield issues found in the corpus."""
        pass

    def issue(
        self, doc: "Document | None", message: str, line: int | None = None
    ) -> LintIssue:
        """Build an issue for this rule at its default severity."""
        return LintIssue(
            rule=self.code,
            severity=self.default_severity,
            path=doc.rel_path if doc is not None else None,
            message=message,
            line=line,
        )
