import asyncio
import logging
from dataclasses import dataclass

import aiohttp
from slack_sdk.errors import SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from ..core.errors import IdentityFetchFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BotIdentity:
    user_id: str | None = None

    @property
    def resolved(self) -> bool:
        return self.user_id is not None


async def fetch_bot_user_id(client: AsyncWebClient) -> str:
    try:
        response = await client.auth_test()
    except (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise IdentityFetchFailure(f"auth.test failed: {exc}") from exc
    user_id = response.get("user_id")
    if not user_id:
        raise IdentityFetchFailure("auth.test returned no user_id")
    return user_id


async def resolve_identity(client: AsyncWebClient) -> BotIdentity:
    """Fetch the bot's user id once; an unreachable Slack leaves it unset."""
    try:
        user_id = await fetch_bot_user_id(client)
    except IdentityFetchFailure as exc:
        logger.error("Error fetching bot user ID: %s", exc)
        return BotIdentity()
    logger.info("Bot User ID is %s", user_id)
    return BotIdentity(user_id)
