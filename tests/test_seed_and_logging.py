import json
import logging

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quickcreate.api.v1.subaccounts import service
from quickcreate.core.logging_config import JsonFormatter, get_logging_config
from quickcreate.core.models import Account
from quickcreate.db.seed_chart import CHART_OF_ACCOUNTS, seed_chart


@pytest.mark.asyncio
async def test_seed_chart_is_idempotent(db_session: AsyncSession) -> None:
    exercise = await seed_chart(db_session, "2025")
    await seed_chart(db_session, "2025")

    count = await db_session.execute(
        select(func.count()).select_from(Account).where(Account.exercise_id == exercise.id)
    )
    assert count.scalar_one() == len(CHART_OF_ACCOUNTS)

    result = await db_session.execute(
        select(Account).where(Account.code == "430", Account.exercise_id == exercise.id)
    )
    clientes = result.scalar_one()
    parent = await db_session.get(Account, clientes.parent_id)
    assert parent.code == "43"

    assert await service.next_free_code(db_session, "430", exercise.id) == "4300000001"


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("quickcreate.test", logging.INFO, __file__, 1, "Sub-account created", None, None)
    record.code = "4300000001"
    record.exercise_id = 3
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["message"] == "Sub-account created"
    assert payload["extra"] == {"code": "4300000001", "exercise_id": 3}


def test_logging_config_selects_formatter() -> None:
    json_config = get_logging_config("debug", "json")
    assert json_config["formatters"]["default"]["()"].endswith("JsonFormatter")
    assert json_config["loggers"]["quickcreate"]["level"] == "DEBUG"

    console_config = get_logging_config("INFO", "console")
    assert "format" in console_config["formatters"]["default"]
