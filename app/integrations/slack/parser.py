"""
Slack Interaction Payload Parser

Decodes the `payload` field of interaction webhooks, the context round-tripped
through the prompt button, and the values of a submitted form.
"""

import json
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from app.integrations.slack.blocks import (
    CHANNEL_ACTION_ID,
    CHANNEL_BLOCK_ID,
    MENTION_ACTION_ID,
    MENTION_BLOCK_ID,
    MESSAGE_ACTION_ID,
    MESSAGE_BLOCK_ID,
)
from app.models.relay import FormSubmission, PendingFormContext


def parse_interaction_payload(raw: Union[str, Dict[str, Any], None]) -> Dict[str, Any]:
    """
    Decode an interaction payload.

    Slack sends the payload as a JSON-encoded string; an already-parsed
    object is accepted as-is.

    Raises:
        ValueError: If the payload is missing, not JSON, or not an object
    """
    if raw is None:
        raise ValueError("Missing interaction payload")

    if isinstance(raw, dict):
        payload = raw
    else:
        try:
            payload = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid interaction payload: {e}") from e

    if not isinstance(payload, dict):
        raise ValueError("Interaction payload must be a JSON object")
    return payload


def parse_pending_context(value: str) -> PendingFormContext:
    """
    Rebuild the context stored in the prompt button's value.

    Raises:
        ValueError: If the value is not a well-formed context
    """
    if not isinstance(value, str):
        raise ValueError("Button context must be a string")
    try:
        return PendingFormContext.model_validate_json(value)
    except ValidationError as e:
        raise ValueError(f"Invalid button context: {e}") from e


def _object(value: Any, where: str) -> Dict[str, Any]:
    """Return value if it is a JSON object. A present-but-null field is malformed."""
    if not isinstance(value, dict):
        raise ValueError(f"Expected an object at {where}, got {type(value).__name__}")
    return value


def _field(values: Dict[str, Any], block_id: str, action_id: str) -> Dict[str, Any]:
    """State of one form element, {} when the block is absent."""
    block = _object(values.get(block_id, {}), block_id)
    return _object(block.get(action_id, {}), f"{block_id}.{action_id}")


def get_first_action(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    First entry of a block_actions payload's `actions` list.

    Raises:
        ValueError: If `actions` is not a list of objects
    """
    actions = payload.get("actions")
    if not actions:
        return None
    if not isinstance(actions, list):
        raise ValueError("block_actions actions must be a list")
    return _object(actions[0], "actions[0]")


def get_view(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    The `view` object of a view_submission payload, {} when absent.

    Raises:
        ValueError: If `view` is present but not an object
    """
    return _object(payload.get("view", {}), "view")


def parse_form_submission(payload: Dict[str, Any]) -> FormSubmission:
    """
    Extract channels, message and mentions from a view_submission payload.

    Examples:
        values.channel_select.channels.selected_options -> channel_ids (in order)
        values.message_input.message.value -> message
        values.user_select.mention.selected_users -> mention_user_ids

    Raises:
        ValueError: If any level of the payload has an unexpected shape
    """
    user_id = _object(payload.get("user", {}), "user").get("id")
    if not isinstance(user_id, str) or not user_id:
        raise ValueError("view_submission payload has no user id")

    state = _object(get_view(payload).get("state", {}), "view.state")
    values = state.get("values")
    if not isinstance(values, dict):
        raise ValueError("view_submission payload has no state values")

    channel_state = _field(values, CHANNEL_BLOCK_ID, CHANNEL_ACTION_ID)
    selected_options = channel_state.get("selected_options") or []
    if not isinstance(selected_options, list):
        raise ValueError("selected_options must be a list")

    channel_ids = []
    for option in selected_options:
        value = _object(option, "selected_options[]").get("value")
        if not isinstance(value, str):
            raise ValueError("Selected channel option has no value")
        channel_ids.append(value)

    message = _field(values, MESSAGE_BLOCK_ID, MESSAGE_ACTION_ID).get("value") or ""
    if not isinstance(message, str):
        raise ValueError("Message value must be a string")

    mention_user_ids = None
    if MENTION_BLOCK_ID in values:
        mention_user_ids = _field(values, MENTION_BLOCK_ID, MENTION_ACTION_ID).get("selected_users")
        if mention_user_ids is not None and (
            not isinstance(mention_user_ids, list)
            or not all(isinstance(user, str) for user in mention_user_ids)
        ):
            raise ValueError("selected_users must be a list of user ids")

    return FormSubmission(
        channel_ids=channel_ids,
        message=message,
        mention_user_ids=mention_user_ids,
        user_id=user_id,
    )
