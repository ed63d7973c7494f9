"""
Interaction Handler

Handles the two interactions that follow a slash command:
- block_actions / open_submit_modal: open the "Send to Channels" form
- view_submission / submit_summary_modal: compose the message and fan it out
Anything else is acknowledged and ignored.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import BackgroundTasks
from slack_sdk.errors import SlackApiError

from app.integrations.slack import ChannelDirectory, SlackClient
from app.integrations.slack.blocks import (
    OPEN_FORM_ACTION_ID,
    SUBMIT_CALLBACK_ID,
    build_submit_view,
)
from app.integrations.slack.parser import (
    get_first_action,
    get_view,
    parse_form_submission,
    parse_pending_context,
)
from app.models.relay import CommandName, PendingFormContext
from app.services.fanout import FanOutSender
from app.services.templates import render_initial_message
from app.utils.helpers import apply_mentions

logger = logging.getLogger(__name__)

CLEAR_RESPONSE = {"response_action": "clear"}


class FormOpenError(RuntimeError):
    """Slack refused to open the submit form."""


class InteractionHandler:
    """Routes interaction payloads to form opening or submission."""

    def __init__(
        self,
        slack_client: SlackClient,
        directory: ChannelDirectory,
        fanout: FanOutSender,
        default_user_id: str,
    ):
        self.slack_client = slack_client
        self.directory = directory
        self.fanout = fanout
        self.default_user_id = default_user_id

    def build_form(self, context: PendingFormContext) -> Dict[str, Any]:
        """Modal definition for a pending command."""
        is_approval = context.command == CommandName.APPROVAL
        return build_submit_view(
            channel_options=self.directory.options_for(context.command),
            initial_message=render_initial_message(context.command, context.summary),
            mention_default_user_id=self.default_user_id if is_approval else None,
        )

    async def handle(
        self,
        payload: Dict[str, Any],
        background_tasks: BackgroundTasks,
    ) -> Optional[Dict[str, Any]]:
        """
        Dispatch an interaction payload.

        Returns:
            JSON body for the response, or None for a bare 200

        Raises:
            ValueError: If the payload is malformed
            FormOpenError: If the form could not be opened
        """
        interaction_type = payload.get("type")

        if interaction_type == "block_actions":
            action = get_first_action(payload)
            if action is not None and action.get("action_id") == OPEN_FORM_ACTION_ID:
                await self.open_form(payload, action)
                return None

        if interaction_type == "view_submission":
            if get_view(payload).get("callback_id") == SUBMIT_CALLBACK_ID:
                return self.submit_form(payload, background_tasks)

        logger.debug(f"Ignoring interaction type={interaction_type}")
        return None

    async def open_form(self, payload: Dict[str, Any], action: Dict[str, Any]) -> None:
        context = parse_pending_context(action.get("value"))
        trigger_id = payload.get("trigger_id")
        if not isinstance(trigger_id, str) or not trigger_id:
            raise ValueError("block_actions payload has no trigger_id")

        view = self.build_form(context)
        try:
            await self.slack_client.open_view(trigger_id, view)
        except SlackApiError as e:
            logger.error(f"Error opening modal for {context.user_id}: {e.response['error']}")
            raise FormOpenError(e.response["error"]) from e

    def submit_form(self, payload: Dict[str, Any], background_tasks: BackgroundTasks) -> Dict[str, Any]:
        submission = parse_form_submission(payload)
        message = apply_mentions(submission.message, submission.mention_user_ids)

        logger.info(f"Submission from {submission.user_id} to channels {submission.channel_ids}")
        logger.debug(f"Message: {message}")

        background_tasks.add_task(
            self.fanout.send,
            submission.channel_ids,
            message,
            submission.user_id,
        )
        return dict(CLEAR_RESPONSE)
