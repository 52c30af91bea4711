"""Pydantic request/response schemas for the Homestead Voice API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from homestead_voice.parsing.models import Intent, ItemType
from homestead_voice.speech.tts import Voice


class ProjectContextModel(BaseModel):
    """The project currently in view."""

    id: str
    title: str


class ParseRequest(BaseModel):
    """Request body for the /api/commands/parse endpoint."""

    transcript: str
    project: ProjectContextModel | None = None


class ParseResponse(BaseModel):
    """Response body for the /api/commands/parse endpoint."""

    intent: Intent
    rule: str
    command: dict[str, Any]


class CommandRequest(BaseModel):
    """Request body for the /api/commands endpoint."""

    transcript: str
    project: ProjectContextModel | None = None
    user_id: str | None = None
    speak: bool = False
    voice: Voice | None = None


class CommandResponse(BaseModel):
    """Response body for the /api/commands endpoint."""

    intent: Intent
    record_id: str | None = None
    title: str | None = None
    item_type: ItemType | None = None
    message: str
    command: dict[str, Any]
    audio_base64: str | None = None


class SpeechRequest(BaseModel):
    """Request body for the /api/speech endpoint."""

    text: str
    voice: Voice | None = None


class ProjectProfileRequest(BaseModel):
    """Request body for the /api/business-plan/executive-summary endpoint."""

    title: str
    location: str | None = None
    property_status: str = "potential_property"
    values_mission_goals: str | None = None
    category: str | None = None
    funding_needs: str | None = None
    guilds: list[str] = []
    water: str | None = None
    soil: str | None = None
    power: str | None = None
    structures: list[str] = []


class ExecutiveSummaryResponse(BaseModel):
    """Response body for the executive summary endpoint.

    ``parsed`` is False when the generated text could not be split into
    sections; ``text`` then carries the whole reply.
    """

    parsed: bool
    mission: str | None = None
    vision: str | None = None
    objectives: str | None = None
    text: str | None = None
    reason: str | None = None
