"""
Message Templates

Pre-populated message bodies for the submit form, keyed by command.
"""

from typing import Callable, Dict

from app.models.relay import CommandName

# Replaced with the selected users when the form is submitted
MENTION_PLACEHOLDER = "@person"


def _inform(summary: str) -> str:
    return (
        "Hi team, we are starting the following change. Please reach out to the "
        "help-network-datacenter channel with any related alerts or issues. Thanks!"
        f"\n\n{summary}"
    )


def _approval(summary: str) -> str:
    return (
        f"Hi {MENTION_PLACEHOLDER}! Approval needed! Please review the attached request:"
        f"\n\n{summary}"
    )


def _summarize(summary: str) -> str:
    return f"Hi team, here is a summary of the recent discussion:\n\n{summary}"


MESSAGE_TEMPLATES: Dict[CommandName, Callable[[str], str]] = {
    CommandName.INFORM: _inform,
    CommandName.APPROVAL: _approval,
    CommandName.SUMMARIZE: _summarize,
}


def render_initial_message(command: CommandName, summary: str) -> str:
    """Raises KeyError for a command without a template."""
    return MESSAGE_TEMPLATES[command](summary)
