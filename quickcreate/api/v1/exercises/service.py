from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.core.config import settings
from quickcreate.core.enums import ExerciseStatus
from quickcreate.core.exceptions import ExerciseClosed, ExerciseNotFound
from quickcreate.core.models import Exercise


async def get_exercise(db: AsyncSession, exercise_id: int) -> Optional[Exercise]:
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    return result.scalar_one_or_none()


async def get_open_exercise(db: AsyncSession) -> Optional[Exercise]:
    """Most recent OPEN exercise. Only used by the UI to pick a default; services always take an explicit id."""
    result = await db.execute(
        select(Exercise)
        .where(Exercise.status == ExerciseStatus.OPEN.value)
        .order_by(Exercise.start_date.desc(), Exercise.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def require_exercise(db: AsyncSession, exercise_id: int, writable: bool = False) -> Exercise:
    """Load exercise or raise ExerciseNotFound; with writable=True also reject CLOSED exercises."""
    exercise = await get_exercise(db, exercise_id)
    if not exercise:
        raise ExerciseNotFound()
    if writable and not exercise.is_open:
        raise ExerciseClosed(f"Exercise '{exercise.code}' is closed and cannot be modified")
    return exercise


def code_length(exercise: Exercise) -> int:
    return exercise.subaccount_code_length or settings.default_subaccount_code_length
