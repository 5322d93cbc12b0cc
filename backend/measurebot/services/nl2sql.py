import logging
from typing import Any, Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import text
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette.concurrency import run_in_threadpool

from ..core.errors import ExecutionFailure
from .provider import get_provider

logger = logging.getLogger(__name__)

Translator = Callable[[str], Awaitable[str]]


async def translate(prompt: str) -> str:
    """Send a composed prompt to the configured provider and return its text verbatim.

    The text is not checked here; a non-compliant answer surfaces as an
    ExecutionFailure once the data store tries to run it.
    """
    provider = get_provider()
    sql = await run_in_threadpool(provider, prompt)
    logger.info("Generated query text: %s", sql)
    return sql


async def run_sql(session: AsyncSession, sql: str) -> list[dict[str, Any]]:
    """Execute translator output as-is and return rows as dicts in column order.

    No rewriting, parameterisation or allow-listing happens: whatever the
    translator produced is what the database runs.
    """
    try:
        res = await session.exec(text(sql))
        cols = list(res.keys())
        rows = [dict(zip(cols, row)) for row in res.fetchall()]
    except SQLAlchemyError as exc:
        detail = str(getattr(exc, "orig", None) or exc)
        raise ExecutionFailure(detail, sql=sql) from exc
    logger.info("Query returned %d row(s)", len(rows))
    return rows
