"""
Issue Enrichment

Looks up the first issue key in a command's text and privately sends the
requester the issue description. Runs detached from the request; every
failure ends here as a log line.
"""

import logging
from typing import Optional

import requests
from slack_sdk.errors import SlackApiError

from app.integrations.jira import JiraClient
from app.integrations.slack import SlackClient
from app.models.relay import CommandInvocation
from app.utils.helpers import find_issue_key, truncate_text

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description"


def format_issue_message(issue_key: str, description: Optional[str], max_length: int) -> str:
    """Render the private message for a fetched issue."""
    if description is not None:
        body = truncate_text(str(description), max_length)
    else:
        body = NO_DESCRIPTION
    return f"*{issue_key}*: {body}"


class IssueEnricher:
    """Fetches issue details for the requester of a slash command."""

    def __init__(self, jira_client: JiraClient, slack_client: SlackClient, max_length: int = 100):
        self.jira_client = jira_client
        self.slack_client = slack_client
        self.max_length = max_length

    def wants(self, text: Optional[str]) -> bool:
        """True when enrichment is configured and the text carries an issue key."""
        return self.jira_client.enabled and find_issue_key(text) is not None

    async def enrich(self, invocation: CommandInvocation) -> None:
        """
        Send the requester the description of the first issue key in the text.

        Never raises.
        """
        issue_key = find_issue_key(invocation.text)
        if issue_key is None:
            logger.debug("No issue key in command text, skipping enrichment")
            return

        try:
            fields = await self.jira_client.get_issue(issue_key)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to fetch Jira issue {issue_key}: {e}")
            return

        text = format_issue_message(issue_key, fields.get("description"), self.max_length)

        try:
            await self.slack_client.post_ephemeral(invocation.channel_id, invocation.user_id, text)
            logger.info(f"Sent {issue_key} details to {invocation.user_id}")
        except SlackApiError as e:
            logger.error(f"Failed to deliver {issue_key} details to {invocation.user_id}: {e.response['error']}")
