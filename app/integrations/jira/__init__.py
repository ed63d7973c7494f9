# Jira integration module
from app.integrations.jira.client import JiraClient

__all__ = ["JiraClient"]
