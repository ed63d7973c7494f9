import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import Settings, get_settings
from app.api.routes import slack
from app.integrations.chatbot import ChatbotClient
from app.integrations.jira import JiraClient
from app.integrations.slack import ChannelDirectory, SlackClient
from app.services.dispatcher import CommandDispatcher
from app.services.enrichment import IssueEnricher
from app.services.fanout import FanOutSender
from app.services.interactions import InteractionHandler

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("app")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)


async def init_services(app: FastAPI, settings: Settings, slack_client: SlackClient) -> None:
    """
    Resolve the channel directory and attach request handlers to app.state.

    Raises:
        ChannelDirectoryError: If any configured channel cannot be resolved
    """
    directory = await ChannelDirectory.build(slack_client, settings.team_channel_ids)

    enricher = IssueEnricher(
        jira_client=JiraClient(),
        slack_client=slack_client,
        max_length=settings.description_max_length,
    )
    app.state.directory = directory
    app.state.dispatcher = CommandDispatcher(
        slack_client=slack_client,
        enricher=enricher,
        chatbot_client=ChatbotClient(),
    )
    app.state.interaction_handler = InteractionHandler(
        slack_client=slack_client,
        directory=directory,
        fanout=FanOutSender(slack_client),
        default_user_id=settings.default_user_id,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Refuse to serve until every destination channel is resolved."""
    logger.info(f"{settings.app_name} starting...")
    await init_services(app, settings, SlackClient())
    logger.info(f"✅ {settings.app_name} ready")
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    description="Slash command to multi-channel Slack relay",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(slack.router, prefix="/slack", tags=["Slack"])


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": "0.1.0",
        "endpoints": {
            "commands": "/slack/commands",
            "interactions": "/slack/interactions",
            "health": "/health",
        },
    }


@app.get("/health")
async def health_check():
    directory = getattr(app.state, "directory", None)
    return {
        "status": "healthy",
        "service": settings.app_name,
        "channels": len(directory) if directory is not None else 0,
    }
