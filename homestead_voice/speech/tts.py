"""Text-to-speech for spoken confirmations using OpenAI."""

from __future__ import annotations

from enum import StrEnum

from openai import OpenAI

from homestead_voice.config import settings


class Voice(StrEnum):
    """Voices offered by the OpenAI speech endpoint."""

    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


def limit_text(text: str, max_chars: int | None = None) -> str:
    """Truncate *text* to keep token usage bounded."""
    limit = max_chars if max_chars is not None else settings.tts_max_chars
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def synthesize_speech(text: str, voice: Voice | str | None = None) -> bytes:
    """Render *text* as MP3 audio.

    Args:
        text: The confirmation to speak.
        voice: Voice name; defaults to ``settings.tts_voice``.

    Returns:
        The MP3-encoded audio bytes.
    """
    client = OpenAI(api_key=settings.openai_api_key or None)
    response = client.audio.speech.create(
        model=settings.tts_model,
        voice=Voice(voice or settings.tts_voice).value,
        input=limit_text(text),
    )
    return response.content
