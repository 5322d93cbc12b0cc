from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ..core.config import settings

router = APIRouter()


@router.post(settings.SLACK_EVENTS_PATH)
async def slack_events(request: Request):
    # set by the startup phase once the bot identity is resolved
    handler = getattr(request.app.state, "slack_handler", None)
    if handler is None:
        return PlainTextResponse("Slack integration unavailable", status_code=503)
    return await handler.handle(request)
