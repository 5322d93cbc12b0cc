"""Slack app_mention handling on top of the shared question pipeline."""
import logging
from typing import Any, Awaitable, Callable

from slack_bolt.async_app import AsyncApp
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from ..core.errors import RenderFailure
from ..services.pipeline import PipelineOutcome
from ..services.render import NO_DATA, to_slack_message
from .identity import BotIdentity

logger = logging.getLogger(__name__)

DATA_FOUND_TEXT = "Data found, please use the slack web, desktop or mobile client."
NO_DATA_TEXT = "No data found"

Runner = Callable[[str], Awaitable[PipelineOutcome]]


class MentionHandler:
    def __init__(self, runner: Runner, identity: BotIdentity):
        self.runner = runner
        self.identity = identity

    async def handle(self, event: dict[str, Any], client: AsyncWebClient) -> None:
        channel = event.get("channel")
        user = event.get("user")
        text = event.get("text", "")
        logger.info("Bot mentioned in channel %s by user %s, message was %s", channel, user, text)

        if self.identity.resolved and user == self.identity.user_id:
            logger.debug("Ignoring mention authored by the bot itself")
            return

        outcome = await self.runner(text)
        if not outcome.ok:
            # internal errors stay out of the shared channel
            logger.error("Could not answer mention in channel %s: %s", channel, outcome.error)
            return

        try:
            message = to_slack_message(outcome.rows)
        except RenderFailure:
            logger.exception("Could not render rows for channel %s", channel)
            return

        if message is NO_DATA:
            await self._post(client, channel, text=NO_DATA_TEXT)
        else:
            await self._post(client, channel, blocks=message, text=DATA_FOUND_TEXT)

    async def _post(self, client: AsyncWebClient, channel: str | None, **kwargs) -> None:
        blocks = kwargs.get("blocks") or []
        try:
            await client.chat_postMessage(channel=channel, **kwargs)
        except SlackApiError as exc:
            # Slack caps a message at 50 blocks and a section at 10 fields
            widest = max((len(b.get("fields", [])) for b in blocks), default=0)
            logger.error(
                "Posting to channel %s failed with %d block(s), widest section %d field(s): %s",
                channel, len(blocks), widest, exc,
            )


def create_slack_app(
    client: AsyncWebClient,
    signing_secret: str,
    handler: MentionHandler,
) -> AsyncApp:
    app = AsyncApp(client=client, signing_secret=signing_secret)

    @app.event("app_mention")
    async def on_app_mention(event, client):
        await handler.handle(event, client)

    @app.error
    async def on_error(error, body):
        logger.error("Slack event error: %s (body=%s)", error, body)

    return app
