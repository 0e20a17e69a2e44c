"""
Seed script for a local database: one open exercise plus a small chart of accounts.

Run with:  python -m quickcreate.db.seed_chart [EXERCISE_CODE]
Existing rows are updated in place, so the script can be run repeatedly.
"""
import asyncio
import logging
import sys
from datetime import date
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.core.config import settings
from quickcreate.core.enums import ExerciseStatus
from quickcreate.core.logging_config import configure_logging
from quickcreate.core.models import Account, Exercise
from quickcreate.db.session import AsyncSessionLocal, create_all

logger = logging.getLogger(__name__)

# (code, description, parent code)
CHART_OF_ACCOUNTS: List[Tuple[str, str, str]] = [
    ("4", "Acreedores y deudores por operaciones comerciales", ""),
    ("40", "Proveedores", "4"),
    ("400", "Proveedores", "40"),
    ("43", "Clientes", "4"),
    ("430", "Clientes", "43"),
    ("5", "Cuentas financieras", ""),
    ("57", "Tesorería", "5"),
    ("570", "Caja, euros", "57"),
    ("572", "Bancos e instituciones de crédito c/c vista, euros", "57"),
    ("6", "Compras y gastos", ""),
    ("60", "Compras", "6"),
    ("600", "Compras de mercaderías", "60"),
    ("62", "Servicios exteriores", "6"),
    ("629", "Otros servicios", "62"),
    ("7", "Ventas e ingresos", ""),
    ("70", "Ventas de mercaderías, de producción propia, de servicios, etc.", "7"),
    ("700", "Ventas de mercaderías", "70"),
]


async def seed_chart(db: AsyncSession, exercise_code: str) -> Exercise:
    """Create or refresh the exercise and its accounts. Returns the exercise."""
    result = await db.execute(select(Exercise).where(Exercise.code == exercise_code))
    exercise = result.scalar_one_or_none()
    if not exercise:
        year = int(exercise_code) if exercise_code.isdigit() else date.today().year
        exercise = Exercise(
            code=exercise_code,
            name=f"Ejercicio {exercise_code}",
            start_date=date(year, 1, 1),
            end_date=date(year, 12, 31),
            subaccount_code_length=settings.default_subaccount_code_length,
            status=ExerciseStatus.OPEN.value,
        )
        db.add(exercise)
        await db.flush()

    accounts_created = 0
    by_code = {}
    for code, description, parent_code in CHART_OF_ACCOUNTS:
        result = await db.execute(
            select(Account).where(Account.code == code, Account.exercise_id == exercise.id)
        )
        account = result.scalar_one_or_none()
        if account:
            account.description = description
        else:
            account = Account(code=code, description=description, exercise_id=exercise.id)
            db.add(account)
            accounts_created += 1
        parent = by_code.get(parent_code)
        if parent is not None:
            await db.flush()
            account.parent_id = parent.id
        by_code[code] = account

    await db.commit()
    logger.info(
        "Chart of accounts seeded",
        extra={"exercise": exercise_code, "accounts_created": accounts_created},
    )
    return exercise


async def main(exercise_code: str) -> None:
    await create_all()
    async with AsyncSessionLocal() as db:
        await seed_chart(db, exercise_code)


if __name__ == "__main__":
    configure_logging(settings.log_level, settings.log_format)
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else str(date.today().year)))
