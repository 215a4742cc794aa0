"""Tests for README table parsing, references and index rendering."""

from skillbook.core.readme import (
    INDEX_END,
    INDEX_START,
    Reference,
    find_references,
    parse_tables,
    render_index,
    split_row,
    update_readme,
)
from skillbook.core.skill_def import CommandDef, SkillDef
from skillbook.core.tool_patterns import ToolPattern

README = """# My Skills

Intro text | with a pipe that is not a table.

| Command | Description | Notes |
|---------|-------------|-------|
| `/review` | Review code | Uses: code-reviewer-pro, `security-audit` |
| `/deploy staging` | Deploy | Uses: [k8s-helper](skills/ops/k8s-helper/SKILL.md) and docker-expert |

```markdown
| Command | Notes |
|---------|-------|
| `/ghost` | Uses: not-a-real-skill |
```

| Workflow | Uses |
|:---------|-----:|
| Release | changelog-writer; - |
"""


class TestSplitRow:
    """Tests for split_row."""

    def test_strips_outer_pipes(self):
        """Leading and trailing pipes are dropped."""
        assert split_row("| a | b |") == ["a", "b"]

    def test_escaped_pipe(self):
        """An escaped pipe stays inside its cell."""
        assert split_row(r"| a \| b | c |") == ["a | b", "c"]


class TestParseTables:
    """Tests for parse_tables."""

    def test_finds_tables_outside_code_fences(self):
        """Tables inside fenced code blocks are skipped."""
        tables = parse_tables(README)

        assert len(tables) == 2
        assert tables[0].headers == ["Command", "Description", "Notes"]
        assert len(tables[0].rows) == 2
        assert tables[0].line == 5
        assert tables[1].headers == ["Workflow", "Uses"]

    def test_column_lookup(self):
        """column() matches headers case-insensitively."""
        table = parse_tables(README)[0]

        assert table.column("command") == ["`/review`", "`/deploy staging`"]
        assert table.column("missing") == []


class TestFindReferences:
    """Tests for find_references."""

    def test_extracts_skill_and_command_references(self):
        """Uses: text, Uses columns and slash triggers all yield references."""
        refs = find_references(README)

        assert Reference("skill", "code-reviewer-pro", 7) in refs
        assert Reference("skill", "security-audit", 7) in refs
        assert Reference("skill", "k8s-helper", 8) in refs
        assert Reference("skill", "docker-expert", 8) in refs
        assert Reference("command", "review", 7) in refs
        assert Reference("command", "deploy", 8) in refs
        assert Reference("skill", "changelog-writer", 18) in refs

    def test_ignores_fenced_code_and_placeholders(self):
        """Fenced tables and "-" placeholders yield nothing."""
        targets = {ref.target for ref in find_references(README)}

        assert "not-a-real-skill" not in targets
        assert "ghost" not in targets
        assert "-" not in targets

    def test_kebab_names_containing_and_are_kept(self):
        """A name containing "and" is not split."""
        refs = find_references("| A | B |\n|---|---|\n| x | Uses: build-and-test |\n")

        assert [r.target for r in refs] == ["build-and-test"]

    def test_uses_column_by_row(self):
        """Each Uses column cell is attributed to its own row."""
        markdown = "| Workflow | USES |\n|---|---|\n| a | one |\n| b | two, three |\n"

        refs = find_references(markdown)

        assert refs == [
            Reference("skill", "one", 3),
            Reference("skill", "two", 4),
            Reference("skill", "three", 4),
        ]


def _skill(category: str, name: str, description: str = "Does things") -> SkillDef:
    return SkillDef(
        id=name, name=name, description=description, category=category, content="# x"
    )


class TestRenderIndex:
    """Tests for render_index."""

    def test_groups_skills_by_category_and_lists_commands(self):
        """Skills are grouped by category and commands listed with their tools."""
        index = render_index(
            [_skill("testing", "unit-tests"), _skill("api", "rest-design", "Design | APIs")],
            [
                CommandDef(
                    id="commit",
                    description="Commit changes",
                    allowed_tools=[ToolPattern(tool="Bash", pattern="git commit:*")],
                    content="# Commit",
                )
            ],
        )

        assert index.index("### api") < index.index("### testing")
        assert "| `rest-design` | Design \\| APIs |" in index
        assert "| `/commit` | Commit changes | `Bash(git commit:*)` |" in index

    def test_rendered_index_references_resolve_to_itself(self):
        """The generated index only references the commands it lists."""
        index = render_index([], [CommandDef(id="commit", description="x", content="")])

        refs = find_references(index)

        assert refs == [Reference("command", "commit", refs[0].line)]

    def test_empty_corpus(self):
        """An empty corpus renders placeholders."""
        index = render_index([], [])

        assert "_No skills yet._" in index
        assert "_No commands yet._" in index


class TestUpdateReadme:
    """Tests for update_readme."""

    def test_appends_region_when_missing(self):
        """The index region is appended when markers are missing."""
        result = update_readme("# Title\n", "## Skills\n")

        assert result == f"# Title\n\n{INDEX_START}\n\n## Skills\n\n{INDEX_END}\n"

    def test_replaces_existing_region(self):
        """Only the text between the markers is replaced."""
        text = f"# Title\n\n{INDEX_START}\nold\n{INDEX_END}\n\nFooter\n"

        result = update_readme(text, "new")

        assert result == f"# Title\n\n{INDEX_START}\n\nnew\n\n{INDEX_END}\n\nFooter\n"

    def test_idempotent(self):
        """Updating twice with the same index changes nothing."""
        once = update_readme("# Title\n", "## Skills\n")

        assert update_readme(once, "## Skills\n") == once
