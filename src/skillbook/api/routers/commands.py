"""Slash command resource router."""

from fastapi import APIRouter, Depends, HTTPException, status

from skillbook.api.deps import get_context
from skillbook.api.schemas import CommandCreate
from skillbook.core.context import SharedContext
from skillbook.core.skill_def import CommandDef
from skillbook.utils.def_loader import DefExistsError, DefNotFoundError, InvalidDefError

router = APIRouter()


@router.get("", response_model=list[CommandDef])
def list_commands(ctx: SharedContext = Depends(get_context)) -> list[CommandDef]:
    """List all valid commands."""
    return ctx.command_loader.discover_commands()


@router.get("/{command_id}", response_model=CommandDef)
def get_command(
    command_id: str, ctx: SharedContext = Depends(get_context)
) -> CommandDef:
    """Get command by ID."""
    try:
        return ctx.command_loader.load_command(command_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Command not found: {command_id}")
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post(
    "/{command_id}", response_model=CommandDef, status_code=status.HTTP_201_CREATED
)
def create_command(
    command_id: str, data: CommandCreate, ctx: SharedContext = Depends(get_context)
) -> CommandDef:
    """Create a new command."""
    try:
        return ctx.command_loader.create_command(
            command_id=command_id,
            description=data.description,
            allowed_tools=data.allowed_tools,
            argument_hint=data.argument_hint,
            content=data.content,
        )
    except DefExistsError:
        raise HTTPException(
            status_code=409, detail=f"Command already exists: {command_id}"
        )
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/{command_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_command(command_id: str, ctx: SharedContext = Depends(get_context)) -> None:
    """Delete a command."""
    try:
        ctx.command_loader.delete_command(command_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Command not found: {command_id}")
