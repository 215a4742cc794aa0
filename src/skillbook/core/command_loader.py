"""Slash command loader for discovering and loading commands."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from skillbook.core.skill_def import CommandDef
from skillbook.core.tool_patterns import ToolPatternError, parse_allowed_tools
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

COMMAND_SUFFIX = ".md"
KNOWN_FIELDS = ("description", "allowed-tools", "argument-hint", "model")


def _format_argument_hint(value: Any) -> str | None:
    # Unquoted "[file] [message]" hints parse as YAML lists
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(f"[{item}]" for item in value)
    return str(value)


class CommandLoader:
    """Loads slash command definitions from commands/<name>.md files."""

    @staticmethod
    def from_config(config: "Config") -> "CommandLoader":
        return CommandLoader(config.commands_path)

    def __init__(self, commands_path: Path):
        """
        Initialize CommandLoader.

        Args:
            commands_path: Directory containing command markdown files
        """
        self.commands_path = commands_path

    def iter_command_files(self) -> list[Path]:
        """Return every command file directly under the commands directory, sorted."""
        if not self.commands_path.exists():
            logger.warning(f"Commands directory not found: {self.commands_path}")
            return []
        return sorted(
            p for p in self.commands_path.glob(f"*{COMMAND_SUFFIX}") if p.is_file()
        )

    def discover_commands(self) -> list[CommandDef]:
        """
        Scan commands directory and return list of valid CommandDef.

        Returns:
            List of CommandDef objects for all valid commands
        """
        commands = []
        for command_file in self.iter_command_files():
            try:
                commands.append(self._load_file(command_file))
            except (InvalidDefError, FrontmatterError) as e:
                logger.warning(f"Skipping command {command_file.stem}: {e}")
                continue
        return commands

    def load_command(self, command_id: str) -> CommandDef:
        """
        Load command by ID.

        Args:
            command_id: Command file stem, with or without a leading "/"

        Returns:
            CommandDef with full content

        Raises:
            DefNotFoundError: Command file doesn't exist
            InvalidDefError: Command file is malformed
        """
        command_id = command_id.removeprefix("/")
        command_file = self.commands_path / f"{command_id}{COMMAND_SUFFIX}"
        if not command_file.is_file():
            raise DefNotFoundError("command", command_id)

        try:
            return self._load_file(command_file)
        except FrontmatterError as e:
            raise InvalidDefError("command", command_id, e.reason)

    def _load_file(self, command_file: Path) -> CommandDef:
        content = read_definition_file(command_file)
        command = parse_definition(content, command_file.stem, self._parse_command_def)
        command.path = command_file
        return command

    def _parse_command_def(
        self, def_id: str, frontmatter: dict[str, Any], body: str
    ) -> CommandDef:
        """Parse command definition from frontmatter (callback for parse_definition)."""
        if not frontmatter:
            raise InvalidDefError("command", def_id, "no valid frontmatter")

        description = frontmatter.get("description")
        if not isinstance(description, str) or not description.strip():
            raise InvalidDefError("command", def_id, "missing required field: description")

        if "allowed-tools" not in frontmatter:
            raise InvalidDefError(
                "command", def_id, "missing required field: allowed-tools"
            )
        try:
            allowed_tools = parse_allowed_tools(frontmatter["allowed-tools"])
        except ToolPatternError as e:
            raise InvalidDefError("command", def_id, str(e))

        try:
            return CommandDef(
                id=def_id,
                description=description.strip(),
                allowed_tools=allowed_tools,
                argument_hint=_format_argument_hint(frontmatter.get("argument-hint")),
                model=frontmatter.get("model"),
                content=body.strip(),
                extra={k: v for k, v in frontmatter.items() if k not in KNOWN_FIELDS},
            )
        except ValidationError as e:
            raise InvalidDefError("command", def_id, str(e))

    def create_command(
        self,
        command_id: str,
        description: str,
        allowed_tools: list[str],
        content: str,
        argument_hint: str | None = None,
    ) -> CommandDef:
        """
        Write a new command file and return the loaded definition.

        Raises:
            DefExistsError: If a command with this id already exists
            InvalidDefError: If the id is not kebab-case or allowed_tools is
                malformed
        """
        command_id = command_id.removeprefix("/")
        if not KEBAB_CASE_RE.match(command_id):
            raise InvalidDefError("command", command_id, "id must be kebab-case")
        command_file = self.commands_path / f"{command_id}{COMMAND_SUFFIX}"
        if command_file.exists():
            raise DefExistsError("command", command_id)

        try:
            patterns = parse_allowed_tools(allowed_tools)
        except ToolPatternError as e:
            raise InvalidDefError("command", command_id, str(e))

        frontmatter: dict[str, Any] = {
            "allowed-tools": ", ".join(str(p) for p in patterns),
            "description": description,
        }
        if argument_hint:
            frontmatter["argument-hint"] = argument_hint

        write_definition(command_file, frontmatter, content)
        try:
            command = self._load_file(command_file)
        except InvalidDefError:
            command_file.unlink()
            raise
        except FrontmatterError as e:
            command_file.unlink()
            raise InvalidDefError("command", command_id, e.reason) from e

        logger.info(f"Created command /{command_id}")
        return command

    def delete_command(self, command_id: str) -> None:
        """
        Remove a command file.

        Raises:
            DefNotFoundError: Command file doesn't exist
        """
        command_id = command_id.removeprefix("/")
        command_file = self.commands_path / f"{command_id}{COMMAND_SUFFIX}"
        if not command_file.is_file():
            raise DefNotFoundError("command", command_id)
        command_file.unlink()
        logger.info(f"Deleted command /{command_id}")
