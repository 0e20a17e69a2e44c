from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.api.v1.exercises.service import get_exercise
from quickcreate.api.v1.subaccounts import service as subaccount_service
from quickcreate.core.config import settings
from quickcreate.core.exceptions import ExerciseNotFound
from quickcreate.core.models import Account

from .schemas import AccountResponse, NextFreeCodeResponse


async def get_account(db: AsyncSession, account_id: int) -> Optional[Account]:
    result = await db.execute(select(Account).where(Account.id == account_id))
    return result.scalar_one_or_none()


async def search_accounts(
    db: AsyncSession,
    query: str,
    exercise_id: int,
) -> List[AccountResponse]:
    """Accounts whose code starts with query or whose description contains it, ordered by code."""
    if not await get_exercise(db, exercise_id):
        raise ExerciseNotFound()

    stmt = select(Account).where(Account.exercise_id == exercise_id)
    query = (query or "").strip()
    if query:
        stmt = stmt.where(
            or_(
                Account.code.startswith(query, autoescape=True),
                Account.description.icontains(query, autoescape=True),
            )
        )
    result = await db.execute(stmt.order_by(Account.code).limit(settings.search_result_limit))
    return [AccountResponse.model_validate(a) for a in result.scalars().all()]


async def get_next_free_code(db: AsyncSession, account_id: int) -> Optional[NextFreeCodeResponse]:
    """Next free sub-account code under the account, in the account's own exercise. None if account is unknown."""
    account = await get_account(db, account_id)
    if not account:
        return None
    code = await subaccount_service.next_free_code(db, account.code, account.exercise_id)
    if code is None:
        return None
    return NextFreeCodeResponse(code=code, parent_code=account.code, description=account.description)
