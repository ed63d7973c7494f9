"""
Shared Utility Functions

Text helpers used by the enrichment and form-submission paths.
"""

import re
from typing import List, Optional

ISSUE_KEY_PATTERN = re.compile(r"[A-Z]+-\d+")
MENTION_PLACEHOLDER_PATTERN = re.compile(re.escape("@person"), re.IGNORECASE)

TRUNCATION_MARKER = "..."


def find_issue_key(text: Optional[str]) -> Optional[str]:
    """
    Return the first issue key (e.g. ``ABC-123``) found in text.

    Args:
        text: Free text typed after the slash command

    Returns:
        The matched key, or None when the text has no key
    """
    if not text:
        return None
    match = ISSUE_KEY_PATTERN.search(text)
    return match.group(0) if match else None


def truncate_text(text: str, max_length: int, marker: str = TRUNCATION_MARKER) -> str:
    """
    Cut text to max_length characters and append marker if anything was cut.

    Text of length <= max_length is returned unchanged.
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + marker


def build_mention_string(user_ids: List[str]) -> str:
    """Wrap each user id in Slack mention syntax, space-separated."""
    return " ".join(f"<@{user_id}>" for user_id in user_ids)


def apply_mentions(message: str, user_ids: Optional[List[str]]) -> str:
    """
    Substitute selected users into a message body.

    Every case-insensitive ``@person`` placeholder is replaced by the mention
    string. Without a placeholder the mention string is prepended, followed
    by a blank line. No users selected leaves the message untouched.

    Examples:
        apply_mentions("Hi @person, please review", ["U1", "U2"])
        -> "Hi <@U1> <@U2>, please review"

        apply_mentions("Please review", ["U1"])
        -> "<@U1>\\n\\nPlease review"
    """
    if not user_ids:
        return message

    mention_string = build_mention_string(user_ids)

    if MENTION_PLACEHOLDER_PATTERN.search(message):
        # Callable replacement so backslashes in ids are never treated as escapes
        return MENTION_PLACEHOLDER_PATTERN.sub(lambda _: mention_string, message)
    return f"{mention_string}\n\n{message}"
