"""
Channel Directory

Resolves the configured destination channels to display names once at
startup. Read-only afterwards.
"""

from slack_sdk.errors import SlackApiError
from app.integrations.slack.client import SlackClient
from app.models.relay import ChannelDirectoryEntry, CommandName
from typing import List
import logging

logger = logging.getLogger(__name__)

# Approval requests only go to the first two destinations
APPROVAL_CHANNEL_COUNT = 2


class ChannelDirectoryError(RuntimeError):
    """Raised when a configured channel cannot be resolved."""


class ChannelDirectory:
    """Ordered, immutable set of destination channels."""

    def __init__(self, entries: List[ChannelDirectoryEntry]):
        self._entries = tuple(entries)

    @classmethod
    async def build(cls, slack_client: SlackClient, channel_ids: List[str]) -> "ChannelDirectory":
        """
        Fetch the display name of each channel, in configuration order.

        Raises:
            ChannelDirectoryError: If any lookup fails
        """
        entries = []
        for channel_id in channel_ids:
            try:
                name = await slack_client.get_channel_name(channel_id)
            except SlackApiError as e:
                raise ChannelDirectoryError(
                    f"Could not resolve channel {channel_id}: {e.response['error']}"
                ) from e
            entries.append(ChannelDirectoryEntry(channel_id=channel_id, display_name=name))
            logger.info(f"Resolved channel {channel_id} -> #{name}")

        logger.info(f"Channel directory ready with {len(entries)} channels")
        return cls(entries)

    @property
    def entries(self) -> tuple:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def options_for(self, command: CommandName) -> List[ChannelDirectoryEntry]:
        """Destination channels offered in the form for a given command."""
        if command == CommandName.APPROVAL:
            return list(self._entries[:APPROVAL_CHANNEL_COUNT])
        return list(self._entries)
