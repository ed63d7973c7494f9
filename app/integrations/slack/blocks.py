"""
Block Kit Builders

Builds the prompt message returned for a slash command and the modal
opened from its button. Block and action ids defined here are the ones
the submission parser reads back.
"""

import logging
from typing import List, Dict, Any, Optional

from app.models.relay import ChannelDirectoryEntry, PendingFormContext

OPEN_FORM_ACTION_ID = "open_submit_modal"
SUBMIT_CALLBACK_ID = "submit_summary_modal"

CHANNEL_BLOCK_ID = "channel_select"
CHANNEL_ACTION_ID = "channels"
MENTION_BLOCK_ID = "user_select"
MENTION_ACTION_ID = "mention"
MESSAGE_BLOCK_ID = "message_input"
MESSAGE_ACTION_ID = "message"

PROMPT_TEXT = "✅ Your request has been processed and posted."

MAX_BUTTON_VALUE_LENGTH = 2000

logger = logging.getLogger(__name__)


def _plain_text(text: str, emoji: Optional[bool] = None) -> Dict[str, Any]:
    element = {"type": "plain_text", "text": text}
    if emoji is not None:
        element["emoji"] = emoji
    return element


def encode_button_context(context: PendingFormContext) -> str:
    """
    Serialize the context for a button value.

    Slack rejects button values over MAX_BUTTON_VALUE_LENGTH characters, so an
    oversized summary is cut until the encoded value fits.
    """
    value = context.model_dump_json()
    if len(value) <= MAX_BUTTON_VALUE_LENGTH:
        return value

    logger.warning(
        f"Summary from {context.user_id} encodes to {len(value)} chars, "
        f"cutting to fit the {MAX_BUTTON_VALUE_LENGTH} char button limit"
    )
    summary = context.summary
    while len(value) > MAX_BUTTON_VALUE_LENGTH and summary:
        overflow = len(value) - MAX_BUTTON_VALUE_LENGTH
        summary = summary[:max(len(summary) - overflow, 0)]
        value = context.model_copy(update={"summary": summary}).model_dump_json()
    return value


def build_prompt_blocks(context: PendingFormContext) -> List[Dict[str, Any]]:
    """Confirmation section plus the button that opens the submit form."""
    return [
        {
            "type": "section",
            "text": _plain_text(PROMPT_TEXT),
        },
        {
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": _plain_text("📤 Open Submit Form", emoji=True),
                    "value": encode_button_context(context),
                    "action_id": OPEN_FORM_ACTION_ID,
                }
            ],
        },
    ]


def build_channel_block(options: List[ChannelDirectoryEntry]) -> Dict[str, Any]:
    return {
        "type": "input",
        "block_id": CHANNEL_BLOCK_ID,
        "label": _plain_text("Select channels(s) to send this to:"),
        "element": {
            "type": "multi_static_select",
            "action_id": CHANNEL_ACTION_ID,
            "placeholder": _plain_text("Select channels"),
            "options": [
                {"text": _plain_text(entry.display_name), "value": entry.channel_id}
                for entry in options
            ],
        },
    }


def build_mention_block(default_user_id: str) -> Dict[str, Any]:
    return {
        "type": "input",
        "block_id": MENTION_BLOCK_ID,
        "label": _plain_text("Select person(s) to @mention for approval"),
        "element": {
            "type": "multi_users_select",
            "action_id": MENTION_ACTION_ID,
            "placeholder": _plain_text("Choose users"),
            "initial_users": [default_user_id],
        },
    }


def build_message_block(initial_message: str) -> Dict[str, Any]:
    return {
        "type": "input",
        "block_id": MESSAGE_BLOCK_ID,
        "label": _plain_text("Message to send:"),
        "element": {
            "type": "plain_text_input",
            "action_id": MESSAGE_ACTION_ID,
            "multiline": True,
            "initial_value": initial_message,
        },
    }


def build_submit_view(
    channel_options: List[ChannelDirectoryEntry],
    initial_message: str,
    mention_default_user_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the "Send to Channels" modal.

    Args:
        channel_options: Destinations offered in the multi-select
        initial_message: Pre-populated message body
        mention_default_user_id: When set, adds the mention picker with this user selected
    """
    blocks = [build_channel_block(channel_options)]
    if mention_default_user_id:
        blocks.append(build_mention_block(mention_default_user_id))
    blocks.append(build_message_block(initial_message))

    return {
        "type": "modal",
        "callback_id": SUBMIT_CALLBACK_ID,
        "title": _plain_text("Send to Channels"),
        "submit": _plain_text("Send"),
        "blocks": blocks,
    }
