from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.auth.rbac import check_permission
from quickcreate.db.session import get_db

from .schemas import ExerciseResponse
from . import service

router = APIRouter(prefix="/api/v1/exercises", tags=["exercises"])


@router.get(
    "/open",
    response_model=ExerciseResponse,
    dependencies=[Depends(check_permission("accounts", "read"))],
)
async def get_open_exercise(db: AsyncSession = Depends(get_db)) -> ExerciseResponse:
    """Currently open exercise, for the UI to preselect. Every other endpoint takes exercise_id explicitly."""
    exercise = await service.get_open_exercise(db)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No open exercise")
    return ExerciseResponse.model_validate(exercise)


@router.get(
    "/{exercise_id}",
    response_model=ExerciseResponse,
    dependencies=[Depends(check_permission("accounts", "read"))],
)
async def get_exercise(exercise_id: int, db: AsyncSession = Depends(get_db)) -> ExerciseResponse:
    """Exercise info, including the sub-account code length used for dot notation."""
    exercise = await service.get_exercise(db, exercise_id)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return ExerciseResponse.model_validate(exercise)
