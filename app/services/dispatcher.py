"""
Command Dispatcher

Acknowledges slash commands immediately and schedules everything else
(issue enrichment, deferred prompts) to run after the response is sent.

Flow:
1. /inform, /approval -> prompt returned inline in the acknowledgment
2. /summarize with a response_url -> empty acknowledgment, the prompt is
   posted to response_url once the chatbot summary is ready
3. Any issue key in the text -> enrichment runs detached, replying privately
"""

import logging
from typing import Any, Dict, Optional

import requests
from fastapi import BackgroundTasks

from app.integrations.chatbot import ChatbotClient
from app.integrations.slack import SlackClient
from app.integrations.slack.blocks import PROMPT_TEXT, build_prompt_blocks
from app.models.relay import CommandInvocation, CommandName, PendingFormContext
from app.services.enrichment import IssueEnricher

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Entry point for slash-command webhooks."""

    def __init__(
        self,
        slack_client: SlackClient,
        enricher: IssueEnricher,
        chatbot_client: Optional[ChatbotClient] = None,
    ):
        self.slack_client = slack_client
        self.enricher = enricher
        self.chatbot_client = chatbot_client

    def build_prompt(self, invocation: CommandInvocation, summary: Optional[str] = None) -> Dict[str, Any]:
        """Prompt message carrying the form context in its button."""
        context = PendingFormContext(
            command=invocation.command,
            summary=invocation.text if summary is None else summary,
            user_id=invocation.user_id,
        )
        return {
            "channel": invocation.channel_id,
            "user": invocation.user_id,
            "text": PROMPT_TEXT,
            "blocks": build_prompt_blocks(context),
        }

    def acknowledge(
        self,
        invocation: CommandInvocation,
        background_tasks: BackgroundTasks,
    ) -> Optional[Dict[str, Any]]:
        """
        Schedule follow-up work and return the synchronous response.

        Returns:
            The prompt payload, or None when the prompt will be posted to
            response_url instead (the caller answers with an empty 200)
        """
        logger.info(f"Command {invocation.command.value} from {invocation.user_id} in {invocation.channel_id}")

        deferred = invocation.command == CommandName.SUMMARIZE and bool(invocation.response_url)

        # Background tasks run in order; the prompt goes first so a slow
        # tracker never holds it back.
        if deferred:
            background_tasks.add_task(self.post_deferred_prompt, invocation)

        if self.enricher.wants(invocation.text):
            background_tasks.add_task(self.run_enrichment, invocation)

        if deferred:
            return None
        return self.build_prompt(invocation)

    async def run_enrichment(self, invocation: CommandInvocation) -> None:
        try:
            await self.enricher.enrich(invocation)
        except Exception as e:
            logger.exception(f"Enrichment crashed for {invocation.user_id}: {e}")

    async def summarize(self, text: str) -> str:
        """Chatbot summary of text, falling back to the text itself."""
        if self.chatbot_client is None or not self.chatbot_client.enabled or not text:
            return text
        try:
            return await self.chatbot_client.chat(text)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Chatbot summary failed, using raw text: {e}")
            return text

    async def post_deferred_prompt(self, invocation: CommandInvocation) -> None:
        """Post the prompt to the invocation's response_url."""
        try:
            summary = await self.summarize(invocation.text)
            prompt = self.build_prompt(invocation, summary=summary)
            delivered = await self.slack_client.post_to_response_url(
                invocation.response_url,
                text=prompt["text"],
                blocks=prompt["blocks"],
            )
            if delivered:
                logger.info(f"Posted deferred prompt for {invocation.user_id}")
        except Exception as e:
            logger.exception(f"Failed to post deferred prompt for {invocation.user_id}: {e}")
