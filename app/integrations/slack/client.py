"""
Slack API Client

Responsibilities:
- conversations.info: Resolve channel display names
- views.open: Open the submit form
- chat.postMessage / chat.postEphemeral: Deliver messages
- response_url: Post deferred prompts back to the invoking command
"""

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from slack_sdk.webhook import WebhookClient
from app.config import get_settings
from typing import List, Optional, Dict, Any
import asyncio
import logging

logger = logging.getLogger(__name__)


class SlackClient:
    """Async wrapper around the blocking slack_sdk WebClient."""

    def __init__(self, client: Optional[WebClient] = None):
        if client is None:
            settings = get_settings()
            client = WebClient(token=settings.slack_bot_token)
        self.client = client

    async def get_channel_name(self, channel_id: str) -> str:
        """
        Look up a channel's display name.

        Raises:
            SlackApiError: If the channel cannot be resolved
        """
        try:
            result = await asyncio.to_thread(
                self.client.conversations_info,
                channel=channel_id
            )
            return result["channel"]["name"]
        except SlackApiError as e:
            logger.error(f"Slack API error looking up channel {channel_id}: {e.response['error']}")
            raise

    async def open_view(self, trigger_id: str, view: Dict[str, Any]) -> None:
        """
        Open a modal. trigger_id is single-use and expires a few seconds
        after the interaction that issued it.

        Raises:
            SlackApiError: If Slack refuses to open the view
        """
        await asyncio.to_thread(
            self.client.views_open,
            trigger_id=trigger_id,
            view=view
        )
        logger.info(f"Opened view {view.get('callback_id')}")

    async def post_message(self, channel_id: str, text: str) -> None:
        """
        Post a message to a channel.

        Raises:
            SlackApiError: If the post fails
        """
        await asyncio.to_thread(
            self.client.chat_postMessage,
            channel=channel_id,
            text=text
        )

    async def post_ephemeral(self, channel_id: str, user_id: str, text: str) -> None:
        """
        Post a message only the given user can see.

        Raises:
            SlackApiError: If the post fails
        """
        await asyncio.to_thread(
            self.client.chat_postEphemeral,
            channel=channel_id,
            user=user_id,
            text=text
        )

    async def post_to_response_url(
        self,
        response_url: str,
        text: str,
        blocks: Optional[List[Dict[str, Any]]] = None
    ) -> bool:
        """
        Send a deferred reply to a slash command's response_url.

        Returns:
            True if Slack accepted the payload
        """
        webhook = WebhookClient(response_url)
        response = await asyncio.to_thread(
            webhook.send,
            text=text,
            blocks=blocks,
            response_type="ephemeral"
        )
        if response.status_code != 200:
            logger.error(f"response_url rejected payload: {response.status_code} {response.body}")
            return False
        return True
