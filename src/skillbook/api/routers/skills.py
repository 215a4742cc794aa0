"""Skill resource router."""

from fastapi import APIRouter, Depends, HTTPException, status

from skillbook.api.deps import get_context
from skillbook.api.schemas import SkillCreate
from skillbook.core.context import SharedContext
from skillbook.core.skill_def import SkillDef
from skillbook.utils.def_loader import DefExistsError, DefNotFoundError, InvalidDefError

router = APIRouter()


@router.get("", response_model=list[SkillDef])
def list_skills(
    category: str | None = None, ctx: SharedContext = Depends(get_context)
) -> list[SkillDef]:
    """List all valid skills, optionally filtered by category."""
    skills = ctx.skill_loader.discover_skills()
    if category is not None:
        skills = [s for s in skills if s.category == category]
    return skills


@router.get("/{skill_id}", response_model=SkillDef)
def get_skill(skill_id: str, ctx: SharedContext = Depends(get_context)) -> SkillDef:
    """Get skill by ID."""
    try:
        return ctx.skill_loader.load_skill(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post(
    "/{skill_id}", response_model=SkillDef, status_code=status.HTTP_201_CREATED
)
def create_skill(
    skill_id: str, data: SkillCreate, ctx: SharedContext = Depends(get_context)
) -> SkillDef:
    """Create a new skill."""
    try:
        return ctx.skill_loader.create_skill(
            category=data.category,
            skill_id=skill_id,
            name=data.name,
            description=data.description,
            content=data.content,
        )
    except DefExistsError:
        raise HTTPException(status_code=409, detail=f"Skill already exists: {skill_id}")
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(skill_id: str, ctx: SharedContext = Depends(get_context)) -> None:
    """Delete a skill."""
    try:
        ctx.skill_loader.delete_skill(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
