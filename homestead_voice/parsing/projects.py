"""Slot extraction for project and business plan commands."""

from __future__ import annotations

import re

from homestead_voice.parsing.models import BusinessPlanCommand, ProjectCommand, ProjectContext

_LOCATION_RE = re.compile(
    r"\b(?:located in|based in|in|at|for)\s+([\w\s,]+)$",
    re.IGNORECASE,
)
_PROJECT_WORDS_RE = re.compile(r"\b(?:create project|new project|project)\b", re.IGNORECASE)
_EDGE_PUNCTUATION_RE = re.compile(r"^[\s:,.-]+|[\s:,.-]+$")


def extract_project(transcript: str) -> ProjectCommand:
    """Build a project command; the location is a trailing ``in/at/for <place>`` clause."""
    location_match = _LOCATION_RE.search(transcript)
    location = location_match.group(1).strip() if location_match else None

    title = transcript
    if location_match:
        title = title[: location_match.start()]
    title = _PROJECT_WORDS_RE.sub("", title)
    title = _EDGE_PUNCTUATION_RE.sub("", " ".join(title.split()))

    return ProjectCommand(
        title=title or transcript.strip(),
        location=location or None,
    )


def extract_business_plan(transcript: str, context: ProjectContext) -> BusinessPlanCommand:
    return BusinessPlanCommand(project_id=context.id, query=transcript)
