from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Slack Relay"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 3000

    # Slack
    slack_bot_token: str
    default_user_id: str  # Pre-selected in the approval mention picker
    team_1_channel_id: str
    team_2_channel_id: str
    team_3_channel_id: str

    # Jira (issue enrichment is disabled when jira_domain is empty)
    jira_domain: str = ""
    jira_username: str = ""
    jira_password: str = ""
    jira_timeout: int = 10  # Seconds
    description_max_length: int = 100

    # Chatbot service used by /summarize
    chatbot_url: str = ""
    chatbot_timeout: int = 30  # Seconds

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def team_channel_ids(self) -> list[str]:
        return [
            self.team_1_channel_id,
            self.team_2_channel_id,
            self.team_3_channel_id,
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
