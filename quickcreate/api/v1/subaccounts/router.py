from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.api.v1.exercises.service import code_length, get_exercise
from quickcreate.auth.rbac import check_permission
from quickcreate.core.config import settings
from quickcreate.core.exceptions import ServiceError
from quickcreate.core.subaccount_code import transform_subaccount_code
from quickcreate.db.session import get_db

from .schemas import SubaccountCreate, SubaccountResponse, SubaccountSearchResponse, TransformResponse
from . import service

router = APIRouter(prefix="/api/v1/subaccounts", tags=["subaccounts"])


@router.get(
    "/search",
    response_model=SubaccountSearchResponse,
    dependencies=[Depends(check_permission("accounts", "read"))],
)
async def search_subaccounts(
    q: str = Query("", max_length=100, description="Code (dot notation allowed) or description text"),
    exercise_id: int = Query(..., description="Exercise to search in"),
    db: AsyncSession = Depends(get_db),
) -> SubaccountSearchResponse:
    """Autocomplete for sub-accounts. Also suggests the next free code when q looks like an account prefix."""
    try:
        return await service.search_subaccounts(db, q, exercise_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "/transform",
    response_model=TransformResponse,
    dependencies=[Depends(check_permission("accounts", "read"))],
)
async def transform_code(
    code: str = Query(..., max_length=30),
    exercise_id: Optional[int] = Query(None, description="Use this exercise's code length"),
    db: AsyncSession = Depends(get_db),
) -> TransformResponse:
    """Expand dot notation (570.1 -> 5700000001) with the exercise code length."""
    length = settings.default_subaccount_code_length
    if exercise_id is not None:
        exercise = await get_exercise(db, exercise_id)
        if not exercise:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
        length = code_length(exercise)
    return TransformResponse(code=code, transformed=transform_subaccount_code(code, length), length=length)


@router.post(
    "",
    response_model=SubaccountResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("accounts", "create"))],
)
async def create_subaccount(
    payload: SubaccountCreate,
    db: AsyncSession = Depends(get_db),
) -> SubaccountResponse:
    """Create a sub-account under a parent account. Empty code allocates the next free one."""
    try:
        return await service.create_subaccount(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
