from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.api.v1.subaccounts import service as subaccount_service
from quickcreate.api.v1.subaccounts.schemas import SubaccountFromCodeCreate, SubaccountResponse
from quickcreate.auth.rbac import check_permission
from quickcreate.core.exceptions import ServiceError
from quickcreate.db.session import get_db

from .schemas import AccountResponse, NextFreeCodeResponse
from . import service

router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


@router.get(
    "/search",
    response_model=List[AccountResponse],
    dependencies=[Depends(check_permission("accounts", "read"))],
)
async def search_accounts(
    q: str = Query("", max_length=100, description="Code prefix or description text"),
    exercise_id: int = Query(...),
    db: AsyncSession = Depends(get_db),
) -> List[AccountResponse]:
    """Parent-account picker for the create sub-account dialog."""
    try:
        return await service.search_accounts(db, q, exercise_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "/{account_id}/next-free-code",
    response_model=NextFreeCodeResponse,
    dependencies=[Depends(check_permission("accounts", "read"))],
)
async def get_next_free_code(
    account_id: int,
    db: AsyncSession = Depends(get_db),
) -> NextFreeCodeResponse:
    """Suggest the next free sub-account code under this account. Nothing is persisted."""
    try:
        result = await service.get_next_free_code(db, account_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    if not result:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return result


@router.post(
    "/from-code",
    response_model=SubaccountResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(check_permission("accounts", "create"))],
)
async def create_account_from_code(
    payload: SubaccountFromCodeCreate,
    db: AsyncSession = Depends(get_db),
) -> SubaccountResponse:
    """Create a sub-account from its full code. The parent account is the longest existing code prefix."""
    try:
        return await subaccount_service.create_subaccount_from_code(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
