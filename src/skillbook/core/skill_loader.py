"""Skill loader for discovering and loading skills."""

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from skillbook.core.skill_def import SkillDef
from skillbook.utils.def_loader import (
    KEBAB_CASE_RE,
    DefExistsError,
    DefNotFoundError,
    FrontmatterError,
    InvalidDefError,
    parse_definition,
    read_definition_file,
    write_definition,
)

if TYPE_CHECKING:
    from skillbook.utils.config import Config

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
SKILL_FIELDS = ("name", "description")


class SkillLoader:
    """Load and manage skill definitions laid out as <category>/<skill>/SKILL.md."""

    @staticmethod
    def from_config(config: "Config") -> "SkillLoader":
        """Create SkillLoader from config."""
        return SkillLoader(config.skills_path)

    def __init__(self, skills_path: Path):
        self.skills_path = skills_path

    def iter_skill_files(self) -> list[Path]:
        """Return every SKILL.md following the category/skill convention, sorted."""
        if not self.skills_path.exists():
            logger.warning(f"Skills directory not found: {self.skills_path}")
            return []
        return sorted(self.skills_path.glob(f"*/*/{SKILL_FILENAME}"))

    def discover_skills(self) -> list[SkillDef]:
        """Scan skills directory and return list of valid SkillDef."""
        skills = []
        for skill_file in self.iter_skill_files():
            skill_id = skill_file.parent.name
            try:
                skills.append(self._load_file(skill_file))
            except (InvalidDefError, FrontmatterError) as e:
                logger.warning(f"Skipping skill {skill_id}: {e}")
                continue
        return skills

    def find_skill_file(self, skill_id: str) -> Path:
        """
        Locate a skill file by directory id or "category/id".

        Raises:
            DefNotFoundError: If no such skill exists
        """
        if "/" in skill_id:
            skill_file = self.skills_path / skill_id / SKILL_FILENAME
            if skill_file.is_file():
                return skill_file
            raise DefNotFoundError("skill", skill_id)

        matches = [f for f in self.iter_skill_files() if f.parent.name == skill_id]
        if not matches:
            raise DefNotFoundError("skill", skill_id)
        if len(matches) > 1:
            categories = ", ".join(f.parent.parent.name for f in matches)
            raise InvalidDefError(
                "skill", skill_id, f"ambiguous id, found in categories: {categories}"
            )
        return matches[0]

    def load_skill(self, skill_id: str) -> SkillDef:
        """Load full skill definition by ID.

        Args:
            skill_id: The skill directory name, optionally prefixed by category

        Returns:
            SkillDef with full content

        Raises:
            DefNotFoundError: If skill doesn't exist
            InvalidDefError: If skill is invalid (malformed, missing fields)
        """
        skill_file = self.find_skill_file(skill_id)
        try:
            return self._load_file(skill_file)
        except FrontmatterError as e:
            raise InvalidDefError("skill", skill_id, e.reason)

    def _load_file(self, skill_file: Path) -> SkillDef:
        content = read_definition_file(skill_file)
        skill = parse_definition(content, skill_file.parent.name, self._parse_skill_def)
        skill.category = skill_file.parent.parent.name
        skill.path = skill_file
        return skill

    def _parse_skill_def(
        self, def_id: str, frontmatter: dict[str, Any], body: str
    ) -> SkillDef:
        """Parse skill definition from frontmatter (callback for parse_definition)."""
        if not frontmatter:
            raise InvalidDefError("skill", def_id, "no valid frontmatter")

        for field in SKILL_FIELDS:
            value = frontmatter.get(field)
            if not isinstance(value, str) or not value.strip():
                raise InvalidDefError("skill", def_id, f"missing required field: {field}")

        try:
            return SkillDef(
                id=def_id,
                name=frontmatter["name"].strip(),
                description=frontmatter["description"].strip(),
                category="",
                content=body.strip(),
                extra={k: v for k, v in frontmatter.items() if k not in SKILL_FIELDS},
            )
        except ValidationError as e:
            raise InvalidDefError("skill", def_id, str(e))

    def create_skill(
        self,
        category: str,
        skill_id: str,
        description: str,
        content: str,
        name: str | None = None,
    ) -> SkillDef:
        """
        Write a new SKILL.md and return the loaded definition.

        Raises:
            DefExistsError: If the skill id is already taken in any category
            InvalidDefError: If category or skill_id is not kebab-case, or the
                written file does not load back
        """
        for label, value in (("category", category), ("id", skill_id)):
            if not KEBAB_CASE_RE.match(value):
                raise InvalidDefError("skill", skill_id, f"{label} must be kebab-case")

        try:
            self.find_skill_file(skill_id)
        except DefNotFoundError:
            pass
        else:
            raise DefExistsError("skill", skill_id)

        category_dir = self.skills_path / category
        skill_file = category_dir / skill_id / SKILL_FILENAME
        created = [d for d in (category_dir, skill_file.parent) if not d.exists()]
        frontmatter = {"name": name or skill_id, "description": description}
        write_definition(skill_file, frontmatter, content)

        try:
            skill = self._load_file(skill_file)
        except InvalidDefError:
            self._remove_created(skill_file, created)
            raise
        except FrontmatterError as e:
            self._remove_created(skill_file, created)
            raise InvalidDefError("skill", skill_id, e.reason) from e

        logger.info(f"Created skill {category}/{skill_id}")
        return skill

    @staticmethod
    def _remove_created(skill_file: Path, created: list[Path]) -> None:
        skill_file.unlink()
        # Innermost first, only directories this call made
        for directory in reversed(created):
            directory.rmdir()

    def delete_skill(self, skill_id: str) -> None:
        """
        Remove a skill directory.

        Raises:
            DefNotFoundError: If skill doesn't exist
        """
        skill_file = self.find_skill_file(skill_id)
        shutil.rmtree(skill_file.parent)
        logger.info(f"Deleted skill {skill_id}")
