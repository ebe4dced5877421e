"""Status catalog endpoint."""

from fastapi import APIRouter

from src.vfxflow.schemas import StatusRead
from src.vfxflow.workflow import list_statuses

router = APIRouter(prefix="/statuses", tags=["statuses"])


@router.get("", response_model=list[StatusRead], summary="List project statuses")
async def get_statuses() -> list[StatusRead]:
    """Every project status with its display color, in lifecycle order."""
    return [StatusRead.model_validate(s) for s in list_statuses()]
