"""
Tests for slash-command acknowledgment and deferred work.
"""

import asyncio
import json
import pytest
import requests
from fastapi import BackgroundTasks
from unittest.mock import AsyncMock, MagicMock

from app.models.relay import CommandInvocation, CommandName
from app.services.dispatcher import CommandDispatcher


def _invocation(command=CommandName.INFORM, text="ABC-123 core switch", response_url=None):
    return CommandInvocation(
        command=command,
        text=text,
        user_id="U1",
        channel_id="CORIGIN",
        response_url=response_url,
    )


@pytest.fixture
def enricher():
    enricher = MagicMock()
    enricher.wants.return_value = True
    enricher.enrich = AsyncMock()
    return enricher


@pytest.fixture
def chatbot_client():
    client = MagicMock()
    client.enabled = True
    client.chat = AsyncMock(return_value="Short summary")
    return client


def _button_context(prompt_blocks):
    button = prompt_blocks[1]["elements"][0]
    assert button["action_id"] == "open_submit_modal"
    return json.loads(button["value"])


def test_inline_prompt_carries_context(slack_client, enricher):
    dispatcher = CommandDispatcher(slack_client, enricher)
    tasks = BackgroundTasks()

    prompt = dispatcher.acknowledge(_invocation(CommandName.APPROVAL), tasks)

    assert prompt["channel"] == "CORIGIN"
    assert prompt["user"] == "U1"
    assert _button_context(prompt["blocks"]) == {
        "command": "/approval",
        "summary": "ABC-123 core switch",
        "user_id": "U1",
    }


def test_prompt_not_delayed_by_hanging_enrichment(slack_client, enricher):
    """Test that the prompt is returned before enrichment even starts."""
    started = asyncio.Event()

    async def hang(invocation):
        started.set()
        await asyncio.sleep(3600)

    enricher.enrich.side_effect = hang
    dispatcher = CommandDispatcher(slack_client, enricher)
    tasks = BackgroundTasks()

    prompt = dispatcher.acknowledge(_invocation(), tasks)

    assert prompt is not None
    assert not started.is_set()
    assert [task.func for task in tasks.tasks] == [dispatcher.run_enrichment]


def test_no_enrichment_without_issue_key(slack_client, enricher):
    enricher.wants.return_value = False
    tasks = BackgroundTasks()

    CommandDispatcher(slack_client, enricher).acknowledge(_invocation(text="plain text"), tasks)

    assert tasks.tasks == []


@pytest.mark.asyncio
async def test_run_enrichment_swallows_errors(slack_client, enricher):
    enricher.enrich.side_effect = RuntimeError("boom")

    await CommandDispatcher(slack_client, enricher).run_enrichment(_invocation())


def test_summarize_with_response_url_is_deferred(slack_client, enricher, chatbot_client):
    """Test that /summarize answers empty and posts the prompt first."""
    dispatcher = CommandDispatcher(slack_client, enricher, chatbot_client)
    tasks = BackgroundTasks()

    prompt = dispatcher.acknowledge(
        _invocation(CommandName.SUMMARIZE, response_url="https://hooks.slack.com/commands/T/1"),
        tasks,
    )

    assert prompt is None
    assert [task.func for task in tasks.tasks] == [
        dispatcher.post_deferred_prompt,
        dispatcher.run_enrichment,
    ]


def test_summarize_without_response_url_is_inline(slack_client, enricher, chatbot_client):
    dispatcher = CommandDispatcher(slack_client, enricher, chatbot_client)

    prompt = dispatcher.acknowledge(_invocation(CommandName.SUMMARIZE), BackgroundTasks())

    assert prompt is not None
    chatbot_client.chat.assert_not_awaited()


@pytest.mark.asyncio
async def test_post_deferred_prompt_uses_chatbot_summary(slack_client, enricher, chatbot_client):
    dispatcher = CommandDispatcher(slack_client, enricher, chatbot_client)
    invocation = _invocation(CommandName.SUMMARIZE, text="long thread", response_url="https://hooks.slack.com/x")

    await dispatcher.post_deferred_prompt(invocation)

    chatbot_client.chat.assert_awaited_once_with("long thread")
    call = slack_client.post_to_response_url.await_args
    assert call.args[0] == "https://hooks.slack.com/x"
    assert _button_context(call.kwargs["blocks"])["summary"] == "Short summary"


@pytest.mark.asyncio
async def test_summarize_falls_back_to_raw_text(slack_client, enricher, chatbot_client):
    chatbot_client.chat.side_effect = requests.Timeout("slow")
    dispatcher = CommandDispatcher(slack_client, enricher, chatbot_client)

    assert await dispatcher.summarize("long thread") == "long thread"


@pytest.mark.asyncio
async def test_summarize_without_chatbot(slack_client, enricher):
    assert await CommandDispatcher(slack_client, enricher).summarize("text") == "text"
