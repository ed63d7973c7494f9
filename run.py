"""
Uvicorn server runner with configurable logging.

Usage:
    python run.py

Environment variables (set in .env file):
    SLACK_BOT_TOKEN=xoxb-... - Bot token (required)
    DEFAULT_USER_ID=U... - User pre-selected for /approval mentions (required)
    TEAM_1_CHANNEL_ID / TEAM_2_CHANNEL_ID / TEAM_3_CHANNEL_ID - Destinations (required)
    JIRA_DOMAIN / JIRA_USERNAME / JIRA_PASSWORD - Issue lookup (optional)
    CHATBOT_URL - Summary service for /summarize (optional)
    DEBUG=true - Enable debug logging
    PORT=3000 - Set server port (default: 3000)
    HOST=127.0.0.1 - Set server host (default: 127.0.0.1)
"""

import uvicorn
from app.config import get_settings

if __name__ == "__main__":
    # Missing required settings fail here, before the server starts
    settings = get_settings()

    # Set log level based on DEBUG setting from .env
    log_level = "debug" if settings.debug else "info"

    print(f"Starting {settings.app_name} server...")
    print(f"Host: {settings.host}")
    print(f"Port: {settings.port}")
    print(f"Log Level: {log_level}")
    print(f"Debug Mode: {settings.debug}")

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=log_level,
        access_log=True,
    )
