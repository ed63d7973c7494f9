"""
Fan-out Sender

Posts one composed message to every selected channel. Each channel is
independent: a failed post is logged and the others still go out.
"""

import asyncio
import logging
from typing import List

from slack_sdk.errors import SlackApiError

from app.integrations.slack import SlackClient
from app.models.relay import ComposedMessage

logger = logging.getLogger(__name__)


def compose_messages(channel_ids: List[str], text: str, user_id: str) -> List[ComposedMessage]:
    """Attach the attribution prefix and pair the text with each channel."""
    final_text = f"📣 Message from <@{user_id}>:\n{text}"
    return [ComposedMessage(channel_id=channel_id, text=final_text) for channel_id in channel_ids]


class FanOutSender:
    """Delivers a submission to its destination channels."""

    def __init__(self, slack_client: SlackClient):
        self.slack_client = slack_client

    async def _send_one(self, message: ComposedMessage) -> bool:
        try:
            await self.slack_client.post_message(message.channel_id, message.text)
            logger.info(f"Message sent to channel {message.channel_id}")
            return True
        except SlackApiError as e:
            logger.error(f"Error sending to channel {message.channel_id}: {e.response['error']}")
        except Exception as e:
            logger.error(f"Unexpected error sending to channel {message.channel_id}: {e}")
        return False

    async def send(self, channel_ids: List[str], text: str, user_id: str) -> int:
        """
        Post to every channel concurrently.

        Returns:
            Number of channels that accepted the message (for logging only)
        """
        if not channel_ids:
            logger.warning(f"Submission from {user_id} selected no channels, nothing sent")
            return 0

        messages = compose_messages(channel_ids, text, user_id)
        results = await asyncio.gather(*(self._send_one(message) for message in messages))

        delivered = sum(results)
        logger.info(f"Fan-out from {user_id}: {delivered}/{len(messages)} channels delivered")
        return delivered
