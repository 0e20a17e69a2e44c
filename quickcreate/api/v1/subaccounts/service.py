"""
Sub-account code allocation and creation.

Codes are prefix-based: a sub-account "4300000001" lives under account "430" in
the same exercise. Allocation walks suffixes 1..MAX_SUBACCOUNT_SUFFIX under a
parent and takes the first free one. Allocation and inserts for one
(exercise, parent) pair are serialised with an asyncio.Lock; the unique
constraint on (code, exercise_id) covers other processes.
"""

import asyncio
import logging
import weakref
from typing import List, NamedTuple, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.api.v1.exercises.service import code_length, get_exercise, require_exercise
from quickcreate.core.config import settings
from quickcreate.core.exceptions import (
    CodeSpaceExhausted,
    DuplicateCode,
    ExerciseNotFound,
    InvalidCode,
    InvalidCodeLength,
    ParentNotFound,
)
from quickcreate.core.models import Account, Exercise, Subaccount
from quickcreate.core.subaccount_code import (
    build_candidate_code,
    looks_like_parent_prefix,
    parent_code_candidates,
    split_dot_prefix,
    transform_subaccount_code,
)

from .schemas import (
    SubaccountCreate,
    SubaccountFromCodeCreate,
    SubaccountResponse,
    SubaccountSearchItem,
    SubaccountSearchResponse,
)

logger = logging.getLogger(__name__)

# One lock table per event loop; asyncio.Lock must not be shared across loops.
# Entries disappear once no task holds or waits on the lock.
_locks_by_loop: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, weakref.WeakValueDictionary[Tuple[int, str], asyncio.Lock]]" = (
    weakref.WeakKeyDictionary()
)


def _allocation_lock(exercise_id: int, parent_code: str) -> asyncio.Lock:
    locks = _locks_by_loop.setdefault(asyncio.get_running_loop(), weakref.WeakValueDictionary())
    key = (exercise_id, parent_code)
    lock = locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        locks[key] = lock
    return lock


def _to_response(sub: Subaccount) -> SubaccountResponse:
    return SubaccountResponse(
        id=sub.id,
        code=sub.code,
        description=sub.description,
        account_id=sub.account_id,
        account_code=sub.account_code,
        exercise_id=sub.exercise_id,
        created_at=sub.created_at,
    )


async def get_account_by_code(db: AsyncSession, code: str, exercise_id: int) -> Optional[Account]:
    result = await db.execute(
        select(Account).where(Account.code == code, Account.exercise_id == exercise_id)
    )
    return result.scalar_one_or_none()


async def subaccount_exists(db: AsyncSession, code: str, exercise_id: int) -> bool:
    result = await db.execute(
        select(Subaccount.id).where(Subaccount.code == code, Subaccount.exercise_id == exercise_id)
    )
    return result.first() is not None


async def _taken_codes(db: AsyncSession, parent_code: str, exercise_id: int) -> Set[str]:
    result = await db.execute(
        select(Subaccount.code).where(
            Subaccount.exercise_id == exercise_id,
            Subaccount.code.startswith(parent_code, autoescape=True),
        )
    )
    return {row[0] for row in result.all()}


async def next_free_code(
    db: AsyncSession,
    parent_account_code: str,
    exercise_id: int,
) -> Optional[str]:
    """
    First unused code under parent_account_code, trying suffixes 1, 2, ... in order.
    Returns None when the exercise or the parent account does not exist.
    Raises CodeSpaceExhausted when every suffix that fits the code length is taken.
    """
    exercise = await get_exercise(db, exercise_id)
    if not exercise:
        return None
    account = await get_account_by_code(db, parent_account_code, exercise_id)
    if not account:
        return None

    length = code_length(exercise)
    taken = await _taken_codes(db, parent_account_code, exercise_id)
    for suffix in range(1, settings.max_subaccount_suffix + 1):
        candidate = build_candidate_code(parent_account_code, suffix, length)
        if len(candidate) > length:
            # Longer suffixes only get longer
            break
        if candidate not in taken:
            return candidate

    logger.warning(
        "Sub-account code space exhausted",
        extra={"parent_code": parent_account_code, "exercise_id": exercise_id},
    )
    raise CodeSpaceExhausted(parent_account_code, settings.max_subaccount_suffix)


async def resolve_parent_by_stripping_suffix(
    db: AsyncSession,
    subaccount_code: str,
    exercise_id: int,
) -> Optional[Account]:
    """Longest existing account code that prefixes subaccount_code (after dropping its last 2 chars)."""
    for candidate in parent_code_candidates(subaccount_code):
        account = await get_account_by_code(db, candidate, exercise_id)
        if account:
            return account
    return None


def _validate_code(code: str, length: int) -> None:
    if not code:
        raise InvalidCode()
    if len(code) != length:
        raise InvalidCodeLength(code, length)


class _Parent(NamedTuple):
    """Plain copy of the parent account; ORM instances expire on rollback."""

    id: int
    code: str
    description: str
    exercise_id: int

    @classmethod
    def of(cls, account: Account) -> "_Parent":
        return cls(account.id, account.code, account.description, account.exercise_id)


async def _insert_subaccount(
    db: AsyncSession,
    parent: _Parent,
    code: str,
    description: Optional[str],
) -> SubaccountResponse:
    if await subaccount_exists(db, code, parent.exercise_id):
        raise DuplicateCode(code)

    sub = Subaccount(
        code=code,
        description=(description or "").strip() or parent.description,
        account_id=parent.id,
        account_code=parent.code,
        exercise_id=parent.exercise_id,
    )
    db.add(sub)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateCode(code)
    await db.refresh(sub)
    logger.info(
        "Sub-account created",
        extra={
            "code": sub.code,
            "subaccount_id": sub.id,
            "parent_code": parent.code,
            "exercise_id": parent.exercise_id,
        },
    )
    return _to_response(sub)


async def _allocate_subaccount(
    db: AsyncSession,
    parent: _Parent,
    description: Optional[str],
) -> SubaccountResponse:
    """Take the next free code under parent and insert it, retrying when another writer got there first."""
    code = None
    async with _allocation_lock(parent.exercise_id, parent.code):
        for attempt in range(1, settings.allocation_max_retries + 1):
            code = await next_free_code(db, parent.code, parent.exercise_id)
            if code is None:
                raise ParentNotFound()
            try:
                return await _insert_subaccount(db, parent, code, description)
            except DuplicateCode:
                logger.warning(
                    "Allocation conflict, retrying",
                    extra={"code": code, "attempt": attempt, "exercise_id": parent.exercise_id},
                )
    raise DuplicateCode(code)


async def create_subaccount(db: AsyncSession, payload: SubaccountCreate) -> SubaccountResponse:
    """
    Create a sub-account under payload.parent_account_id.

    An explicit code is checked for length and uniqueness before the parent is resolved, so a
    taken code reports DuplicateCode whichever parent was picked. When the target exercise differs
    from the parent's, the account with the same code in the target exercise is used as parent.
    """
    result = await db.execute(select(Account).where(Account.id == payload.parent_account_id))
    parent = result.scalar_one_or_none()

    exercise_id = payload.exercise_id or (parent.exercise_id if parent else None)
    if exercise_id is None:
        raise ParentNotFound()
    exercise = await require_exercise(db, exercise_id, writable=True)
    length = code_length(exercise)
    code = transform_subaccount_code(payload.code, length)

    if code:
        _validate_code(code, length)
        if await subaccount_exists(db, code, exercise.id):
            raise DuplicateCode(code)

    if not parent:
        raise ParentNotFound()
    if parent.exercise_id != exercise.id:
        parent = await get_account_by_code(db, parent.code, exercise.id)
        if not parent:
            raise ParentNotFound(f"Parent account does not exist in exercise '{exercise.code}'")

    target = _Parent.of(parent)
    if not code:
        return await _allocate_subaccount(db, target, payload.description)
    if not code.startswith(target.code):
        raise ParentNotFound(f"Code '{code}' does not belong to account '{target.code}'")

    async with _allocation_lock(target.exercise_id, target.code):
        return await _insert_subaccount(db, target, code, payload.description)


async def create_subaccount_from_code(
    db: AsyncSession,
    payload: SubaccountFromCodeCreate,
) -> SubaccountResponse:
    """Create a sub-account from a full code, locating its parent account by prefix."""
    exercise = await require_exercise(db, payload.exercise_id, writable=True)
    length = code_length(exercise)
    code = transform_subaccount_code(payload.code, length)
    _validate_code(code, length)

    if await subaccount_exists(db, code, exercise.id):
        raise DuplicateCode(code)

    parent = await resolve_parent_by_stripping_suffix(db, code, exercise.id)
    if not parent:
        logger.info("No parent account for code", extra={"code": code, "exercise_id": exercise.id})
        raise ParentNotFound(f"No parent account found for code '{code}'")

    target = _Parent.of(parent)
    async with _allocation_lock(target.exercise_id, target.code):
        return await _insert_subaccount(db, target, code, payload.description)


async def _suggest_code(db: AsyncSession, query: str, exercise: Exercise) -> Optional[str]:
    prefix = query if looks_like_parent_prefix(query) else split_dot_prefix(query)
    if not prefix:
        return None
    try:
        return await next_free_code(db, prefix, exercise.id)
    except CodeSpaceExhausted:
        return None


async def search_subaccounts(
    db: AsyncSession,
    query: str,
    exercise_id: int,
) -> SubaccountSearchResponse:
    """
    Search by canonical code prefix first, then fill with description matches.
    Code matches are capped at SEARCH_CODE_MATCH_LIMIT, the total at SEARCH_RESULT_LIMIT.
    """
    exercise = await get_exercise(db, exercise_id)
    if not exercise:
        raise ExerciseNotFound()

    query = (query or "").strip()
    if not query:
        return SubaccountSearchResponse()

    canonical = transform_subaccount_code(query, code_length(exercise))
    by_code = await db.execute(
        select(Subaccount)
        .where(
            Subaccount.exercise_id == exercise.id,
            Subaccount.code.startswith(canonical, autoescape=True),
        )
        .order_by(Subaccount.code)
        .limit(min(settings.search_code_match_limit, settings.search_result_limit))
    )
    rows: List[Subaccount] = list(by_code.scalars().all())

    remaining = settings.search_result_limit - len(rows)
    if remaining > 0:
        stmt = select(Subaccount).where(
            Subaccount.exercise_id == exercise.id,
            Subaccount.description.icontains(query, autoescape=True),
        )
        seen = [r.id for r in rows]
        if seen:
            stmt = stmt.where(Subaccount.id.notin_(seen))
        by_description = await db.execute(stmt.order_by(Subaccount.code).limit(remaining))
        rows.extend(by_description.scalars().all())

    return SubaccountSearchResponse(
        results=[SubaccountSearchItem.model_validate(r) for r in rows],
        suggested_code=await _suggest_code(db, query, exercise),
    )
