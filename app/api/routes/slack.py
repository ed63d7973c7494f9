"""
Slack Webhook Routes

POST /slack/commands      - slash commands (/inform, /approval, /summarize)
POST /slack/interactions  - button clicks and form submissions
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Form, HTTPException, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from typing import Any, Dict, Optional, Union
import logging

from app.integrations.slack.parser import parse_interaction_payload
from app.models.relay import CommandInvocation, CommandName
from app.services.dispatcher import CommandDispatcher
from app.services.interactions import FormOpenError, InteractionHandler

logger = logging.getLogger(__name__)
router = APIRouter()


def get_dispatcher(request: Request) -> CommandDispatcher:
    """CommandDispatcher built at startup."""
    return request.app.state.dispatcher


def get_interaction_handler(request: Request) -> InteractionHandler:
    """InteractionHandler built at startup."""
    return request.app.state.interaction_handler


@router.post("/commands")
async def slash_command(
    background_tasks: BackgroundTasks,
    command: str = Form(...),
    text: str = Form(""),
    user_id: str = Form(...),
    channel_id: str = Form(...),
    response_url: Optional[str] = Form(None),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
):
    """
    Acknowledge a slash command.

    Returns the prompt inline, or an empty 200 when the prompt is posted to
    response_url afterwards. Unsupported commands get a 400 and nothing else.
    """
    try:
        invocation = CommandInvocation(
            command=CommandName.parse(command),
            text=text,
            user_id=user_id,
            channel_id=channel_id,
            response_url=response_url or None,
        )
    except ValueError:
        logger.info(f"Rejected unsupported command {command!r} from {user_id}")
        return PlainTextResponse("Unsupported command.", status_code=400)

    prompt = dispatcher.acknowledge(invocation, background_tasks)
    if prompt is None:
        return Response(status_code=200)
    return JSONResponse(prompt)


async def _read_payload(request: Request) -> Union[str, Dict[str, Any], None]:
    """
    The `payload` field of an interaction request.

    Slack posts it form-encoded as a JSON string; a JSON body may carry it
    as an already-parsed object.

    Raises:
        ValueError: If a JSON body cannot be decoded or is not an object
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        body = await request.json()
        if not isinstance(body, dict):
            raise ValueError("JSON body must be an object")
        return body.get("payload")

    form = await request.form()
    return form.get("payload")


@router.post("/interactions")
async def interaction(
    request: Request,
    background_tasks: BackgroundTasks,
    handler: InteractionHandler = Depends(get_interaction_handler),
):
    """
    Handle a Slack interaction.

    - 400: payload is not valid JSON or lacks required fields
    - 500: the submit form could not be opened
    - 200: everything else, with {"response_action": "clear"} after a submission
    """
    try:
        payload = await _read_payload(request)
        parsed = parse_interaction_payload(payload)
        body = await handler.handle(parsed, background_tasks)
    except ValueError as e:
        logger.error(f"Invalid payload: {e}")
        raise HTTPException(status_code=400, detail="Invalid payload")
    except FormOpenError as e:
        logger.error(f"Error opening modal: {e}")
        raise HTTPException(status_code=500, detail="Failed to open form")

    if body is None:
        return Response(status_code=200)
    return JSONResponse(body)
