"""
Jira API Client

Fetches a single issue over basic authentication. Callers own error
handling; this client raises on any transport, HTTP or decoding failure.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import requests
from requests.auth import HTTPBasicAuth

from app.config import get_settings

logger = logging.getLogger(__name__)


class JiraClient:
    """Minimal Jira REST client."""

    def __init__(
        self,
        domain: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.domain = domain if domain is not None else settings.jira_domain
        self.auth = HTTPBasicAuth(
            username if username is not None else settings.jira_username,
            password if password is not None else settings.jira_password,
        )
        self.timeout = timeout if timeout is not None else settings.jira_timeout

    @property
    def enabled(self) -> bool:
        return bool(self.domain)

    @property
    def base_url(self) -> str:
        domain = self.domain.rstrip("/")
        if domain.startswith(("http://", "https://")):
            return domain
        return f"https://{domain}"

    def _get_issue(self, issue_key: str) -> Dict[str, Any]:
        url = f"{self.base_url}/rest/api/2/issue/{issue_key}"
        response = requests.get(
            url,
            auth=self.auth,
            params={"fields": "summary,description"},
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected Jira response for {issue_key}")
        return data

    async def get_issue(self, issue_key: str) -> Dict[str, Any]:
        """
        Fetch an issue record.

        Returns:
            The issue's ``fields`` object (``description`` may be absent or null)

        Raises:
            requests.RequestException: On network, auth or HTTP errors
            ValueError: If the response body is not a JSON object
        """
        logger.info(f"Fetching Jira issue {issue_key}")
        data = await asyncio.to_thread(self._get_issue, issue_key)
        return data.get("fields") or {}
