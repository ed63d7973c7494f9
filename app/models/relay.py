"""
Relay Data Models

Request-scoped records that flow from a slash command, through the
interactive form, to the fan-out of the composed message.
None of these are persisted.
"""

from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from typing import List, Optional


class CommandName(str, Enum):
    """Supported slash commands."""

    INFORM = "/inform"
    APPROVAL = "/approval"
    SUMMARIZE = "/summarize"

    @classmethod
    def parse(cls, value: str) -> "CommandName":
        """Return the matching command or raise ValueError."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unsupported command: {value!r}")


class CommandInvocation(BaseModel):
    """One incoming slash-command webhook."""

    command: CommandName
    text: str = ""
    user_id: str
    channel_id: str
    response_url: Optional[str] = None  # Set when the prompt can be posted later


class ChannelDirectoryEntry(BaseModel):
    """Configured destination channel with its display name."""

    model_config = ConfigDict(frozen=True)

    channel_id: str
    display_name: str


class PendingFormContext(BaseModel):
    """
    Context carried in the prompt button's value.

    Serialized with compact keys matching what the platform echoes back to us,
    so the server keeps no state between the prompt and the form-open click.
    """

    model_config = ConfigDict(frozen=True)

    command: CommandName
    summary: str = ""
    user_id: str


class FormSubmission(BaseModel):
    """Values extracted from a submitted form."""

    channel_ids: List[str] = Field(default_factory=list)  # In selection order
    message: str = ""
    mention_user_ids: Optional[List[str]] = None  # None when the form had no mention field
    user_id: str


class ComposedMessage(BaseModel):
    """Final text bound for a single destination channel."""

    channel_id: str
    text: str
