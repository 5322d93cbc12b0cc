import logging
from dataclasses import dataclass
from typing import Any

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.errors import PipelineError
from .nl2sql import Translator, run_sql, translate
from .prompt import compose_prompt

logger = logging.getLogger(__name__)


async def answer_question(
    question: str,
    session: AsyncSession,
    translator: Translator = translate,
) -> list[dict[str, Any]]:
    """question -> prompt -> translator -> query text -> rows.

    Raises TranslationFailure or ExecutionFailure; each external call is
    attempted once.
    """
    logger.info("Question asked was %s", question)
    prompt = compose_prompt(question)
    sql = await translator(prompt)
    return await run_sql(session, sql)


@dataclass(frozen=True)
class PipelineOutcome:
    rows: list[dict[str, Any]] | None = None
    error: PipelineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def try_answer(
    question: str,
    session: AsyncSession,
    translator: Translator = translate,
) -> PipelineOutcome:
    try:
        rows = await answer_question(question, session, translator)
    except PipelineError as exc:
        return PipelineOutcome(error=exc)
    return PipelineOutcome(rows=rows)
