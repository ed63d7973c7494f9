# Shared data models
from app.models.relay import (
    CommandName,
    CommandInvocation,
    ChannelDirectoryEntry,
    PendingFormContext,
    FormSubmission,
    ComposedMessage,
)

__all__ = [
    "CommandName",
    "CommandInvocation",
    "ChannelDirectoryEntry",
    "PendingFormContext",
    "FormSubmission",
    "ComposedMessage",
]
