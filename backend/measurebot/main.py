import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slack_bolt.adapter.fastapi.async_handler import AsyncSlackRequestHandler
from slack_sdk.web.async_client import AsyncWebClient

from .api import ask, health, slack
from .core.config import settings
from .core.logging import configure_logging
from .db.session import dispose_engine, open_session
from .services.pipeline import try_answer
from .slack.bot import MentionHandler, create_slack_app
from .slack.identity import resolve_identity

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(ask.router)
app.include_router(slack.router)


async def run_question(question: str):
    async with open_session() as session:
        return await try_answer(question, session)


@app.on_event("startup")
async def on_startup():
    configure_logging(settings.LOG_LEVEL)
    app.state.slack_handler = None
    app.state.mention_handler = None
    if not settings.slack_enabled:
        logger.warning("SLACK_BOT_TOKEN or SLACK_SIGNING_SECRET unset; Slack events are disabled")
        return

    client = AsyncWebClient(token=settings.SLACK_BOT_TOKEN)
    identity = await resolve_identity(client)
    app.state.mention_handler = MentionHandler(run_question, identity)
    bolt_app = create_slack_app(client, settings.SLACK_SIGNING_SECRET, app.state.mention_handler)
    app.state.slack_handler = AsyncSlackRequestHandler(bolt_app)
    logger.info("Slack events mounted at %s", settings.SLACK_EVENTS_PATH)


@app.on_event("shutdown")
async def on_shutdown():
    await dispose_engine()


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
