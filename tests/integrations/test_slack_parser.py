"""
Tests for Slack interaction payload parsing.
"""

import json
import pytest

from app.integrations.slack.parser import (
    get_first_action,
    get_view,
    parse_form_submission,
    parse_interaction_payload,
    parse_pending_context,
)
from app.models.relay import CommandName, PendingFormContext


def _submission_payload(values: dict, user_id: str = "USUBMIT") -> dict:
    return {
        "type": "view_submission",
        "user": {"id": user_id},
        "view": {"callback_id": "submit_summary_modal", "state": {"values": values}},
    }


class TestParseInteractionPayload:
    """Test suite for payload decoding."""

    def test_json_string(self):
        result = parse_interaction_payload('{"type": "block_actions"}')
        assert result == {"type": "block_actions"}

    def test_already_parsed(self):
        payload = {"type": "view_submission"}
        assert parse_interaction_payload(payload) is payload

    def test_invalid_payloads(self):
        """Test that unusable payloads raise ValueError."""
        for raw in [None, "not-json", "[1, 2]", "{broken"]:
            with pytest.raises(ValueError):
                parse_interaction_payload(raw)


class TestParsePendingContext:
    """Test suite for the button context round trip."""

    def test_valid_context(self):
        value = json.dumps({"summary": "ABC-1 change", "user_id": "U1", "command": "/approval"})
        context = parse_pending_context(value)

        assert isinstance(context, PendingFormContext)
        assert context.command == CommandName.APPROVAL
        assert context.summary == "ABC-1 change"
        assert context.user_id == "U1"

    def test_invalid_context(self):
        invalid_values = [
            "",
            "not-json",
            json.dumps({"summary": "x", "user_id": "U1", "command": "/unknown"}),
            json.dumps({"summary": "x", "command": "/inform"}),
        ]
        for value in invalid_values:
            with pytest.raises(ValueError):
                parse_pending_context(value)


class TestParseFormSubmission:
    """Test suite for submitted form values."""

    def test_full_submission(self):
        payload = _submission_payload({
            "channel_select": {"channels": {"selected_options": [
                {"value": "C222"}, {"value": "C111"},
            ]}},
            "user_select": {"mention": {"selected_users": ["U1", "U2"]}},
            "message_input": {"message": {"value": "Hi @person"}},
        })
        submission = parse_form_submission(payload)

        assert submission.channel_ids == ["C222", "C111"]
        assert submission.mention_user_ids == ["U1", "U2"]
        assert submission.message == "Hi @person"
        assert submission.user_id == "USUBMIT"

    def test_without_mention_block(self):
        payload = _submission_payload({
            "channel_select": {"channels": {"selected_options": [{"value": "C333"}]}},
            "message_input": {"message": {"value": "Heads up"}},
        })
        submission = parse_form_submission(payload)

        assert submission.mention_user_ids is None
        assert submission.channel_ids == ["C333"]

    def test_empty_channel_selection(self):
        payload = _submission_payload({
            "channel_select": {"channels": {"selected_options": []}},
            "message_input": {"message": {"value": "Heads up"}},
        })
        assert parse_form_submission(payload).channel_ids == []

    def test_missing_state(self):
        with pytest.raises(ValueError):
            parse_form_submission({"type": "view_submission", "user": {"id": "U1"}})

    def test_badly_shaped_submissions(self):
        """Test that wrong types at any level raise ValueError, not KeyError/TypeError."""
        good_channel = {"channels": {"selected_options": [{"value": "C111"}]}}
        good_message = {"message": {"value": "Heads up"}}
        shapes = [
            {"channel_select": None, "message_input": good_message},
            {"channel_select": good_channel, "message_input": good_message, "user_select": "U1"},
            {"channel_select": {"channels": None}, "message_input": good_message},
            {"channel_select": {"channels": {"selected_options": [{"text": "no value"}]}}},
            {"channel_select": {"channels": {"selected_options": ["C111"]}}},
            {"channel_select": {"channels": {"selected_options": "C111"}}},
            {"channel_select": good_channel, "message_input": {"message": "Heads up"}},
            {"channel_select": good_channel, "message_input": {"message": {"value": 42}}},
            {"channel_select": good_channel, "user_select": {"mention": {"selected_users": "U1"}}},
        ]
        for values in shapes:
            with pytest.raises(ValueError):
                parse_form_submission(_submission_payload(values))

    def test_badly_shaped_envelopes(self):
        payloads = [
            {"type": "view_submission", "user": "USUBMIT", "view": {"state": {"values": {}}}},
            {"type": "view_submission", "user": {"id": "USUBMIT"}, "view": "oops"},
            {"type": "view_submission", "user": {"id": "USUBMIT"}, "view": {"state": []}},
        ]
        for payload in payloads:
            with pytest.raises(ValueError):
                parse_form_submission(payload)

    def test_null_channel_state_is_empty_selection(self):
        payload = _submission_payload({
            "channel_select": {"channels": {"selected_options": None}},
            "message_input": {"message": {"value": None}},
        })
        submission = parse_form_submission(payload)

        assert submission.channel_ids == []
        assert submission.message == ""


class TestPayloadAccessors:
    """Test suite for the actions/view accessors."""

    def test_get_first_action(self):
        assert get_first_action({"actions": [{"action_id": "a"}, {"action_id": "b"}]}) == {"action_id": "a"}
        assert get_first_action({"actions": []}) is None
        assert get_first_action({}) is None

    def test_get_first_action_bad_shapes(self):
        for payload in [{"actions": ["open_submit_modal"]}, {"actions": "open_submit_modal"}]:
            with pytest.raises(ValueError):
                get_first_action(payload)

    def test_get_view(self):
        assert get_view({"view": {"callback_id": "x"}}) == {"callback_id": "x"}
        assert get_view({}) == {}
        with pytest.raises(ValueError):
            get_view({"view": "oops"})
        with pytest.raises(ValueError):
            get_view({"view": None})

    def test_non_string_button_context(self):
        for value in [None, {"command": "/inform"}, 42]:
            with pytest.raises(ValueError):
                parse_pending_context(value)
