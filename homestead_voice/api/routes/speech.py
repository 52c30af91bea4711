"""Speech endpoint: synthesise a confirmation as MP3 audio."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response
from openai import APIError

from homestead_voice.api.models import SpeechRequest
from homestead_voice.config import settings
from homestead_voice.speech.tts import synthesize_speech

router = APIRouter()


@router.post("/api/speech", response_class=Response)
def speech(request: SpeechRequest) -> Response:
    """Return the spoken version of *text* as ``audio/mpeg``."""
    if not settings.openai_api_key:
        raise HTTPException(
            status_code=501,
            detail="Speech synthesis not configured (OPENAI_API_KEY missing)",
        )

    try:
        audio = synthesize_speech(request.text, request.voice)
    except APIError as exc:
        # Return 503 so the browser receives a proper JSON response with CORS headers intact.
        raise HTTPException(status_code=503, detail=f"Speech unavailable: {exc.message}") from exc

    return Response(content=audio, media_type="audio/mpeg")
