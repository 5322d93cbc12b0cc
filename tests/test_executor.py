from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from measurebot.core.errors import ExecutionFailure
from measurebot.services.nl2sql import run_sql


async def _run_against_measures(sql: str):
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.exec_driver_sql(
            "CREATE TABLE vm_simple_measures "
            "(measurement TEXT, clinic_id INTEGER, answer_value REAL, evaluation_date_time TEXT)"
        )
        await conn.exec_driver_sql(
            "INSERT INTO vm_simple_measures VALUES "
            "('Hemoglobin', 3, 13.2, '2024-01-15T10:30:00Z'), "
            "('Hemoglobin', 3, 12.8, '2024-01-22T09:00:00Z'), "
            "('Glucose', 4, 101.0, '2024-01-16T08:00:00Z')"
        )
    try:
        async with AsyncSession(engine) as session:
            return await run_sql(session, sql)
    finally:
        await engine.dispose()


def test_rows_come_back_as_dicts_in_column_order() -> None:
    rows = asyncio.run(_run_against_measures(
        "SELECT DISTINCT measurement, answer_value, evaluation_date_time FROM vm_simple_measures "
        "WHERE measurement LIKE '%hemo%' ORDER BY evaluation_date_time"
    ))
    assert rows == [
        {"measurement": "Hemoglobin", "answer_value": 13.2, "evaluation_date_time": "2024-01-15T10:30:00Z"},
        {"measurement": "Hemoglobin", "answer_value": 12.8, "evaluation_date_time": "2024-01-22T09:00:00Z"},
    ]
    assert list(rows[0]) == ["measurement", "answer_value", "evaluation_date_time"]


def test_empty_result_is_an_empty_list() -> None:
    assert asyncio.run(_run_against_measures("SELECT * FROM vm_simple_measures WHERE clinic_id = 99")) == []


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT * FROM vw_unknown",
        "SELECT nonexistent_field FROM vm_simple_measures",
        "Here is your query:\nSELECT * FROM vm_simple_measures",
        "SQL: SELECT 1",
    ],
)
def test_rejected_query_text_is_execution_failure(sql: str) -> None:
    with pytest.raises(ExecutionFailure) as info:
        asyncio.run(_run_against_measures(sql))
    assert info.value.sql == sql
    assert info.value.detail
