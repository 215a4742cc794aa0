"""Built-in lint rules for skill and command corpora."""

import re
from collections import defaultdict
from typing import TYPE_CHECKING, Iterable

from skillbook.core.readme import find_references
from skillbook.core.tool_patterns import ToolPatternError, parse_allowed_tools
from skillbook.lint.base import LintIssue, Rule, Severity
from skillbook.utils.def_loader import KEBAB_CASE_RE

if TYPE_CHECKING:
    from skillbook.core.corpus import Corpus, Document

ATX_HEADING_RE = re.compile(r"^ {0,3}#{1,6}(\s|$)")
SETEXT_UNDERLINE_RE = re.compile(r"^ {0,3}(=+|-+)\s*$")
FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})")


def find_heading(body: str) -> int | None:
    """Return the 1-based body line of the first heading outside code fences."""
    fence: str | None = None
    previous = ""
    for idx, line in enumerate(body.split("\n"), start=1):
        fence_match = FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)[0]
            if fence is None:
                fence = marker
            elif marker == fence:
                fence = None
            previous = ""
            continue
        if fence is not None:
            continue

        if ATX_HEADING_RE.match(line):
            return idx
        if previous.strip() and SETEXT_UNDERLINE_RE.match(line):
            return idx - 1
        previous = line
    return None


def _required_string(doc: "Document", key: str) -> str | None:
    """Return a problem description for a required string field, or None."""
    if key not in doc.frontmatter:
        return f"missing required field: {key}"
    value = doc.frontmatter[key]
    if not isinstance(value, str):
        return f"'{key}' must be a string, got {type(value).__name__}"
    if not value.strip():
        return f"'{key}' must not be empty"
    return None


class FrontmatterValidRule(Rule):
    code = "SB001"
    name = "frontmatter-valid"
    description = "Every document starts with a YAML frontmatter mapping."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.documents:
            if not doc.raw.strip():
                continue  # reported by non-empty
            if doc.frontmatter_error is not None:
                yield self.issue(
                    doc, doc.frontmatter_error.reason, doc.frontmatter_error.line
                )
            elif not doc.has_frontmatter:
                yield self.issue(doc, "missing frontmatter block delimited by '---'", 1)


class SkillRequiredFieldsRule(Rule):
    code = "SB002"
    name = "skill-required-fields"
    description = "Skills declare non-empty 'name' and 'description'."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.skills:
            if not doc.parsed:
                continue
            for key in ("name", "description"):
                problem = _required_string(doc, key)
                if problem:
                    yield self.issue(doc, problem)


class SkillNameFormatRule(Rule):
    code = "SB003"
    name = "skill-name-format"
    description = "Skill names are kebab-case identifiers."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.skills:
            name = doc.get("name")
            if isinstance(name, str) and name.strip() and not KEBAB_CASE_RE.match(name):
                yield self.issue(doc, f"skill name '{name}' is not kebab-case")


class SkillNameUniqueRule(Rule):
    code = "SB004"
    name = "skill-name-unique"
    description = "Skill names are unique across the corpus."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        seen: dict[str, "Document"] = {}
        for doc in corpus.skills:
            name = doc.get("name")
            if not isinstance(name, str) or not name.strip():
                continue
            name = name.strip()
            if name in seen:
                yield self.issue(
                    doc, f"duplicate skill name '{name}' (also in {seen[name].rel_path})"
                )
            else:
                seen[name] = doc


class CommandDescriptionRule(Rule):
    code = "SB005"
    name = "command-description"
    description = "Commands declare a non-empty 'description'."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.commands:
            if not doc.parsed:
                continue
            problem = _required_string(doc, "description")
            if problem:
                yield self.issue(doc, problem)


class CommandAllowedToolsRule(Rule):
    code = "SB006"
    name = "command-allowed-tools"
    description = "Commands declare a well-formed 'allowed-tools' list."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.commands:
            if not doc.parsed:
                continue
            if "allowed-tools" not in doc.frontmatter:
                yield self.issue(doc, "missing required field: allowed-tools")
                continue
            try:
                parse_allowed_tools(doc.frontmatter["allowed-tools"])
            except ToolPatternError as e:
                yield self.issue(doc, str(e))


class CommandNameUniqueRule(Rule):
    code = "SB007"
    name = "command-name-unique"
    description = "Command file names are unique (case-insensitive)."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        groups: dict[str, list["Document"]] = defaultdict(list)
        for doc in corpus.commands:
            groups[doc.id.casefold()].append(doc)
        for docs in groups.values():
            first, *duplicates = docs
            for doc in duplicates:
                yield self.issue(
                    doc, f"duplicate command '/{doc.id}' (also in {first.rel_path})"
                )


class ReadmeReferencesRule(Rule):
    code = "SB008"
    name = "readme-references"
    description = "README table references resolve to existing skills and commands."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        if corpus.readme is None or corpus.readme_path is None:
            return
        readme = corpus.readme_path.relative_to(corpus.root)
        skills = corpus.skill_names()
        commands = corpus.command_names()

        for ref in find_references(corpus.readme):
            known = skills if ref.kind == "skill" else commands
            if ref.target not in known:
                target = ref.target if ref.kind == "skill" else f"/{ref.target}"
                yield LintIssue(
                    rule=self.code,
                    severity=self.default_severity,
                    path=readme,
                    message=f"unknown {ref.kind} reference '{target}'",
                    line=ref.line,
                )


class NonEmptyRule(Rule):
    code = "SB009"
    name = "non-empty"
    description = "No document is empty."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.documents:
            if not doc.raw.strip():
                yield self.issue(doc, "file is empty")


class BodyHeadingRule(Rule):
    code = "SB010"
    name = "body-heading"
    description = "Every document body contains at least one markdown heading."

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.documents:
            if not doc.raw.strip():
                continue
            if find_heading(doc.body) is None:
                yield self.issue(
                    doc, "body has no markdown heading", doc.body_offset + 1
                )


class LayoutRule(Rule):
    code = "SB011"
    name = "layout"
    description = (
        "Skills live at skills/<category>/<skill>/SKILL.md and commands at "
        "commands/<command>.md."
    )
    default_severity = Severity.WARNING

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.skills:
            depth = len(doc.path.relative_to(corpus.skills_path).parts)
            if depth != 3:
                yield self.issue(
                    doc, "skill is not at <skills>/<category>/<skill>/SKILL.md"
                )
        for doc in corpus.commands:
            depth = len(doc.path.relative_to(corpus.commands_path).parts)
            if depth != 1:
                yield self.issue(doc, "command is not directly under <commands>/")


class SkillNameMatchesDirRule(Rule):
    code = "SB012"
    name = "skill-name-matches-dir"
    description = "A skill's name matches its directory name."
    default_severity = Severity.WARNING

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.skills:
            name = doc.get("name")
            if isinstance(name, str) and name.strip() and name.strip() != doc.id:
                yield self.issue(
                    doc, f"skill name '{name.strip()}' differs from directory '{doc.id}'"
                )


class DescriptionSingleLineRule(Rule):
    code = "SB013"
    name = "description-single-line"
    description = "Descriptions fit on one line."
    default_severity = Severity.WARNING

    def check(self, corpus: "Corpus") -> Iterable[LintIssue]:
        for doc in corpus.documents:
            description = doc.get("description")
            if isinstance(description, str) and "\n" in description.strip():
                yield self.issue(doc, "description spans multiple lines")


BUILTIN_RULES: list[type[Rule]] = [
    FrontmatterValidRule,
    SkillRequiredFieldsRule,
    SkillNameFormatRule,
    SkillNameUniqueRule,
    CommandDescriptionRule,
    CommandAllowedToolsRule,
    CommandNameUniqueRule,
    ReadmeReferencesRule,
    NonEmptyRule,
    BodyHeadingRule,
    LayoutRule,
    SkillNameMatchesDirRule,
    DescriptionSingleLineRule,
]
