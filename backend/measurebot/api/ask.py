import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.errors import PipelineError
from ..db.session import get_session
from ..schemas.ask import AskRequest
from ..services.nl2sql import Translator, translate
from ..services.pipeline import answer_question
from ..services.render import render_rows

logger = logging.getLogger(__name__)

router = APIRouter()


def get_translator() -> Translator:
    return translate


@router.post("/ask")
async def ask(
    body: AskRequest,
    session: AsyncSession = Depends(get_session),
    translator: Translator = Depends(get_translator),
):
    try:
        rows = await answer_question(body.question, session, translator)
    except PipelineError:
        logger.exception("Error processing the request")
        return PlainTextResponse("Server Error", status_code=500)
    return render_rows(rows)
