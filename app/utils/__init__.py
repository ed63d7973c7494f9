"""
Utility package exports
"""

from app.utils.helpers import find_issue_key, truncate_text, build_mention_string, apply_mentions

__all__ = ["find_issue_key", "truncate_text", "build_mention_string", "apply_mentions"]
