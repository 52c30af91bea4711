"""HTTP client wrapper for the Homestead Voice FastAPI backend."""

from __future__ import annotations

import os
from typing import Any

import httpx

API_URL = os.getenv("API_URL", "http://localhost:8000")


def _project_payload(project_id: str | None, project_title: str | None) -> dict[str, str] | None:
    if not project_id:
        return None
    return {"id": project_id, "title": project_title or ""}


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def parse_transcript(
    transcript: str,
    project_id: str | None = None,
    project_title: str | None = None,
) -> dict[str, Any]:
    """Ask the API how it would interpret *transcript* (nothing is created)."""
    r = httpx.post(
        f"{API_URL}/api/commands/parse",
        json={
            "transcript": transcript,
            "project": _project_payload(project_id, project_title),
        },
        timeout=10.0,
    )
    r.raise_for_status()
    return r.json()  # type: ignore[no-any-return]


def submit_command(
    transcript: str,
    project_id: str | None = None,
    project_title: str | None = None,
    user_id: str | None = None,
) -> dict[str, Any]:
    """Execute *transcript* as a command and return the confirmation payload."""
    r = httpx.post(
        f"{API_URL}/api/commands",
        json={
            "transcript": transcript,
            "project": _project_payload(project_id, project_title),
            "user_id": user_id,
        },
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()  # type: ignore[no-any-return]
