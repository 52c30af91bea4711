"""Tests for API endpoints (no Supabase, OpenAI or Anthropic access required)."""

import base64
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from homestead_voice.api.main import app
from homestead_voice.business_plan.segmenter import ExecutiveSummary, UnparsedSummary
from homestead_voice.commands.errors import RETRY_MESSAGE

client = TestClient(app)

ORCHARD = {"id": "p1", "title": "Orchard"}


def _supabase_returning(rows):
    supabase = MagicMock()
    supabase.table.return_value.insert.return_value.execute.return_value.data = rows
    return supabase


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


# --- /api/commands/parse ---


def test_parse_requires_transcript():
    response = client.post("/api/commands/parse", json={})
    assert response.status_code == 422


def test_parse_inventory():
    response = client.post("/api/commands/parse", json={"transcript": "add 5 shovels to inventory"})
    assert response.status_code == 200
    body = response.json()
    assert body["intent"] == "inventory"
    assert body["rule"] == "inventory"
    assert body["command"]["title"] == "shovels"
    assert body["command"]["quantity_needed"] == 5
    assert "quantity_owned" not in body["command"]


def test_parse_business_plan_in_project():
    response = client.post(
        "/api/commands/parse",
        json={"transcript": "business plan for funding", "project": ORCHARD},
    )
    body = response.json()
    assert body["intent"] == "business_plan"
    assert body["command"] == {"project_id": "p1", "query": "business plan for funding"}


# --- /api/commands ---


def test_execute_creates_inventory_item():
    supabase = _supabase_returning([{"id": "i1", "title": "shovels", "item_type": "needed_supply"}])
    with patch("homestead_voice.api.routes.commands.get_supabase_client", return_value=supabase):
        response = client.post(
            "/api/commands",
            json={"transcript": "add 5 shovels to inventory", "user_id": "u1"},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["record_id"] == "i1"
    assert body["item_type"] == "needed_supply"
    assert body["message"].startswith('I\'ve added "shovels" to your inventory as a needed supply.')
    assert body["audio_base64"] is None
    supabase.table.assert_called_once_with("items")


def test_execute_project_task():
    supabase = _supabase_returning([{"id": "t1", "title": "install irrigation"}])
    with patch("homestead_voice.api.routes.commands.get_supabase_client", return_value=supabase):
        response = client.post(
            "/api/commands",
            json={"transcript": "install irrigation", "project": ORCHARD},
        )

    body = response.json()
    assert body["intent"] == "task"
    assert body["command"]["priority"] == "high"
    assert body["command"]["project_id"] == "p1"
    assert body["message"].endswith('This task has been added to your project "Orchard".')


def test_execute_speaks_confirmation():
    supabase = _supabase_returning([{"id": "t1", "title": "order seeds"}])
    with (
        patch("homestead_voice.api.routes.commands.get_supabase_client", return_value=supabase),
        patch("homestead_voice.api.routes.commands.settings") as mock_settings,
        patch("homestead_voice.api.routes.commands.synthesize_speech", return_value=b"mp3"),
    ):
        mock_settings.openai_api_key = "sk-test"
        response = client.post(
            "/api/commands",
            json={"transcript": "remind me to order seeds", "speak": True, "voice": "echo"},
        )

    assert response.status_code == 200
    assert base64.b64decode(response.json()["audio_base64"]) == b"mp3"


def test_execute_empty_transcript_returns_422():
    with patch("homestead_voice.api.routes.commands.get_supabase_client", return_value=MagicMock()):
        response = client.post("/api/commands", json={"transcript": "   "})
    assert response.status_code == 422


def test_execute_insert_failure_returns_502():
    supabase = MagicMock()
    supabase.table.return_value.insert.return_value.execute.side_effect = APIError(
        {"message": "permission denied", "code": "42501", "hint": "", "details": ""}
    )
    with patch("homestead_voice.api.routes.commands.get_supabase_client", return_value=supabase):
        response = client.post("/api/commands", json={"transcript": "add 5 shovels to inventory"})

    assert response.status_code == 502
    assert response.json()["detail"] == RETRY_MESSAGE


# --- /api/speech ---


def test_speech_no_key_returns_501():
    with patch("homestead_voice.api.routes.speech.settings") as mock_settings:
        mock_settings.openai_api_key = ""
        response = client.post("/api/speech", json={"text": "Task created"})
    assert response.status_code == 501
    assert "not configured" in response.json()["detail"].lower()


def test_speech_returns_mp3():
    with (
        patch("homestead_voice.api.routes.speech.settings") as mock_settings,
        patch("homestead_voice.api.routes.speech.synthesize_speech", return_value=b"ID3audio"),
    ):
        mock_settings.openai_api_key = "sk-test"
        response = client.post("/api/speech", json={"text": "Task created", "voice": "nova"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.content == b"ID3audio"


def test_speech_rejects_unknown_voice():
    response = client.post("/api/speech", json={"text": "hi", "voice": "robot"})
    assert response.status_code == 422


# --- /api/business-plan/executive-summary ---


def test_executive_summary_parsed():
    summary = ExecutiveSummary(mission="Grow food.", vision="A valley.", objectives="Plant trees.")
    with patch(
        "homestead_voice.api.routes.business_plan.generate_executive_summary",
        return_value=summary,
    ) as mock_generate:
        response = client.post(
            "/api/business-plan/executive-summary",
            json={"title": "Orchard", "guilds": ["apple guild"]},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["parsed"] is True
    assert body["mission"] == "Grow food."
    assert mock_generate.call_args[0][0].guilds == ["apple guild"]


def test_executive_summary_unparsed():
    unparsed = UnparsedSummary(text="One paragraph.", reason="expected at least 3 paragraphs, found 1")
    with patch(
        "homestead_voice.api.routes.business_plan.generate_executive_summary",
        return_value=unparsed,
    ):
        response = client.post("/api/business-plan/executive-summary", json={"title": "Orchard"})

    body = response.json()
    assert body["parsed"] is False
    assert body["text"] == "One paragraph."
    assert body["mission"] is None
