# Slack integration module
from app.integrations.slack.client import SlackClient
from app.integrations.slack.directory import ChannelDirectory, ChannelDirectoryError
from app.integrations.slack.parser import (
    parse_interaction_payload,
    parse_pending_context,
    parse_form_submission,
)

__all__ = [
    "SlackClient",
    "ChannelDirectory",
    "ChannelDirectoryError",
    "parse_interaction_payload",
    "parse_pending_context",
    "parse_form_submission",
]
