"""Raw snapshot of a skill corpus, including documents that fail to parse."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from skillbook.core.command_loader import COMMAND_SUFFIX
from skillbook.core.skill_loader import SKILL_FILENAME
from skillbook.utils.def_loader import (
    FrontmatterError,
    parse_frontmatter,
    read_definition_file,
    split_frontmatter,
)

if TYPE_CHECKING:
    from skillbook.utils.config import Config

logger = logging.getLogger(__name__)

DocKind = Literal["skill", "command"]


@dataclass
class Document:
    """A single skill or command file as found on disk."""

    kind: DocKind
    id: str
    path: Path
    rel_path: Path
    raw: str
    has_frontmatter: bool = False
    frontmatter: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    frontmatter_error: FrontmatterError | None = None

    @classmethod
    def read(cls, kind: DocKind, path: Path, root: Path) -> "Document":
        def_id = path.parent.name if kind == "skill" else path.stem
        try:
            raw = read_definition_file(path)
            decode_error = None
        except FrontmatterError as e:
            raw = path.read_bytes().decode("utf-8", errors="replace")
            decode_error = e
        doc = cls(kind=kind, id=def_id, path=path, rel_path=path.relative_to(root), raw=raw)

        frontmatter_text, doc.body = split_frontmatter(raw)
        doc.has_frontmatter = frontmatter_text is not None
        if decode_error is not None:
            doc.frontmatter_error = decode_error
            return doc

        try:
            doc.frontmatter, _ = parse_frontmatter(raw)
        except FrontmatterError as e:
            doc.frontmatter_error = e
        return doc

    @property
    def parsed(self) -> bool:
        """True when frontmatter is present and is a valid mapping."""
        return self.has_frontmatter and self.frontmatter_error is None

    def get(self, key: str) -> Any:
        return self.frontmatter.get(key)

    @property
    def body_offset(self) -> int:
        """Number of lines preceding the body (frontmatter block included)."""
        if not self.has_frontmatter:
            return 0
        return self.raw.replace("\r\n", "\n").count("\n") - self.body.count("\n")


@dataclass
class Corpus:
    """Everything the linter looks at, read once per run."""

    root: Path
    skills_path: Path
    commands_path: Path
    skills: list[Document] = field(default_factory=list)
    commands: list[Document] = field(default_factory=list)
    readme_path: Path | None = None
    readme: str | None = None

    @classmethod
    def scan(cls, config: "Config") -> "Corpus":
        """Read all skill files, command files and the README under a workspace."""
        corpus = cls(
            root=config.workspace,
            skills_path=config.skills_path,
            commands_path=config.commands_path,
            readme_path=config.readme_path,
        )

        if config.skills_path.is_dir():
            for path in sorted(config.skills_path.rglob(SKILL_FILENAME)):
                corpus.skills.append(Document.read("skill", path, config.workspace))
        else:
            logger.warning(f"Skills directory not found: {config.skills_path}")

        if config.commands_path.is_dir():
            for path in sorted(config.commands_path.rglob(f"*{COMMAND_SUFFIX}")):
                if path.is_file():
                    corpus.commands.append(Document.read("command", path, config.workspace))
        else:
            logger.warning(f"Commands directory not found: {config.commands_path}")

        if config.readme_path.is_file():
            readme_bytes = config.readme_path.read_bytes()
            corpus.readme = readme_bytes.decode("utf-8", errors="replace")

        logger.debug(
            f"Scanned {len(corpus.skills)} skill(s) and {len(corpus.commands)} command(s)"
        )
        return corpus

    @property
    def documents(self) -> list[Document]:
        return [*self.skills, *self.commands]

    def skill_names(self) -> set[str]:
        """Identifiers a README may refer to: frontmatter names and directory ids."""
        names = set()
        for doc in self.skills:
            names.add(doc.id)
            name = doc.get("name")
            if isinstance(name, str) and name.strip():
                names.add(name.strip())
        return names

    def command_names(self) -> set[str]:
        return {doc.id for doc in self.commands}
