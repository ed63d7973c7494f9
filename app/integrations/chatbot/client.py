"""
Chatbot Service Client

Used by /summarize to turn raw text into a summary before it is placed
in the submit form.
"""

import asyncio
import logging
from typing import Optional

import requests

from app.config import get_settings

logger = logging.getLogger(__name__)


class ChatbotClient:
    """Client for the conversation endpoint of the chatbot service."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        settings = get_settings()
        self.base_url = (base_url if base_url is not None else settings.chatbot_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.chatbot_timeout

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def _chat(self, message: str) -> str:
        response = requests.post(
            f"{self.base_url}/conversations/chat/",
            json={"message": message},
            timeout=self.timeout,
        )
        response.raise_for_status()
        reply = response.json().get("reply")
        if not isinstance(reply, str):
            raise ValueError("Chatbot response has no reply")
        return reply

    async def chat(self, message: str) -> str:
        """
        Send a message and return the chatbot's reply.

        Raises:
            requests.RequestException: On network or HTTP errors
            ValueError: If the response carries no reply
        """
        logger.info(f"Requesting chatbot reply ({len(message)} chars)")
        return await asyncio.to_thread(self._chat, message)
