"""README table parsing, cross-reference extraction and index rendering."""

import re
from dataclasses import dataclass, field
from itertools import groupby
from typing import Iterable, Literal

from skillbook.core.skill_def import CommandDef, SkillDef

INDEX_START = "<!-- skillbook:index:start -->"
INDEX_END = "<!-- skillbook:index:end -->"

FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})")
DELIMITER_ROW_RE = re.compile(r"^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")
USES_RE = re.compile(r"\buses?\s*:\s*(.+)", re.IGNORECASE)
LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]*\)")
COMMAND_REF_RE = re.compile(r"`/([A-Za-z0-9][\w-]*)(?:\s[^`]*)?`")
USES_HEADERS = {"uses", "skills used", "uses skills"}

RefKind = Literal["skill", "command"]


@dataclass
class MarkdownTable:
    """A pipe table found in a markdown document."""

    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)
    line: int = 0  # 1-based line of the header row

    def column(self, header: str) -> list[str]:
        """Return cells of the column whose header matches (case-insensitive)."""
        wanted = header.lower()
        for idx, name in enumerate(self.headers):
            if name.lower() == wanted:
                return [row[idx] if idx < len(row) else "" for row in self.rows]
        return []


@dataclass(frozen=True)
class Reference:
    """A cross-reference from a README table cell to a skill or command."""

    kind: RefKind
    target: str
    line: int


def split_row(line: str) -> list[str]:
    """Split a table row into stripped cells, honouring escaped pipes."""
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    cells = re.split(r"(?<!\\)\|", row)
    return [cell.strip().replace("\\|", "|") for cell in cells]


def parse_tables(markdown: str) -> list[MarkdownTable]:
    """Find every pipe table outside fenced code blocks."""
    lines = markdown.replace("\r\n", "\n").split("\n")
    tables: list[MarkdownTable] = []
    fence: str | None = None
    idx = 0

    while idx < len(lines):
        line = lines[idx]
        fence_match = FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker[0]
            elif marker[0] == fence:
                fence = None
            idx += 1
            continue

        if (
            fence is None
            and "|" in line
            and idx + 1 < len(lines)
            and "-" in lines[idx + 1]
            and DELIMITER_ROW_RE.match(lines[idx + 1])
        ):
            table = MarkdownTable(headers=split_row(line), line=idx + 1)
            idx += 2
            while idx < len(lines) and "|" in lines[idx] and lines[idx].strip():
                table.rows.append(split_row(lines[idx]))
                idx += 1
            tables.append(table)
            continue

        idx += 1

    return tables


def _clean_identifier(raw: str) -> str:
    text = LINK_RE.sub(r"\1", raw)
    return text.strip().strip("`*_").strip()


def _split_identifiers(text: str) -> list[str]:
    parts = re.split(r",|;|\s+and\s+", text)
    return [ident for ident in (_clean_identifier(p) for p in parts) if ident]


def find_references(markdown: str) -> list[Reference]:
    """
    Extract skill and command references from README tables.

    Skill references come from "Uses: a, b" cell text and from cells in a
    "Uses" column. Command references are backticked slash triggers such as
    `/deploy`.
    """
    refs: list[Reference] = []

    for table in parse_tables(markdown):
        # +2 skips the header and delimiter rows
        first_line = table.line + 2
        uses_headers = [name for name in table.headers if name.lower() in USES_HEADERS]

        for header in uses_headers:
            for row_offset, cell in enumerate(table.column(header)):
                refs.extend(
                    Reference("skill", t, first_line + row_offset)
                    for t in _split_identifiers(cell)
                    if t != "-"
                )

        for row_offset, row in enumerate(table.rows):
            line = first_line + row_offset
            for col, cell in enumerate(row):
                header = table.headers[col] if col < len(table.headers) else ""
                if header not in uses_headers:
                    match = USES_RE.search(cell)
                    if match:
                        refs.extend(
                            Reference("skill", t, line)
                            for t in _split_identifiers(match.group(1))
                            if t != "-"
                        )
                refs.extend(
                    Reference("command", name, line)
                    for name in COMMAND_REF_RE.findall(cell)
                )

    return refs


def _escape_cell(text: str) -> str:
    return " ".join(text.split()).replace("|", "\\|")


def render_index(skills: Iterable[SkillDef], commands: Iterable[CommandDef]) -> str:
    """Render the organisational skill and command tables as markdown."""
    out: list[str] = ["## Skills", ""]

    skills = sorted(skills, key=lambda s: (s.category, s.name))
    if not skills:
        out += ["_No skills yet._", ""]
    for category, group in groupby(skills, key=lambda s: s.category):
        out += [f"### {category}", "", "| Skill | Description |", "|-------|-------------|"]
        for skill in group:
            out.append(f"| `{skill.name}` | {_escape_cell(skill.description)} |")
        out.append("")

    out += ["## Commands", ""]
    commands = sorted(commands, key=lambda c: c.id)
    if not commands:
        out += ["_No commands yet._", ""]
    else:
        out += [
            "| Command | Description | Allowed tools |",
            "|---------|-------------|---------------|",
        ]
        for command in commands:
            tools = ", ".join(f"`{_escape_cell(str(t))}`" for t in command.allowed_tools)
            out.append(
                f"| `{command.trigger}` | {_escape_cell(command.description)} | {tools or '-'} |"
            )
        out.append("")

    return "\n".join(out).rstrip() + "\n"


def update_readme(text: str, index: str) -> str:
    """
    Replace the generated index region of a README.

    The region between the start and end markers is replaced; when the
    markers are missing the region is appended to the end of the document.
    """
    block = f"{INDEX_START}\n\n{index.strip()}\n\n{INDEX_END}"

    start = text.find(INDEX_START)
    end = text.find(INDEX_END, start + len(INDEX_START)) if start != -1 else -1
    if start == -1 or end == -1:
        separator = "" if not text or text.endswith("\n\n") else (
            "\n" if text.endswith("\n") else "\n\n"
        )
        return f"{text}{separator}{block}\n"

    return text[:start] + block + text[end + len(INDEX_END) :]
