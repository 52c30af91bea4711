"""Tests for text-to-speech synthesis."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from homestead_voice.speech.tts import Voice, limit_text, synthesize_speech


class TestLimitText:
    def test_short_text_unchanged(self) -> None:
        assert limit_text("hello", max_chars=10) == "hello"

    def test_long_text_truncated(self) -> None:
        assert limit_text("abcdefghij", max_chars=4) == "abcd..."


class TestSynthesizeSpeech:
    @patch("homestead_voice.speech.tts.OpenAI")
    def test_returns_audio_bytes(self, mock_openai: MagicMock) -> None:
        client = mock_openai.return_value
        client.audio.speech.create.return_value.content = b"mp3-bytes"

        audio = synthesize_speech("Task created", Voice.ECHO)

        assert audio == b"mp3-bytes"
        kwargs = client.audio.speech.create.call_args.kwargs
        assert kwargs["voice"] == "echo"
        assert kwargs["input"] == "Task created"

    @patch("homestead_voice.speech.tts.OpenAI")
    def test_accepts_voice_name(self, mock_openai: MagicMock) -> None:
        mock_openai.return_value.audio.speech.create.return_value.content = b""
        synthesize_speech("hi", "shimmer")
        kwargs = mock_openai.return_value.audio.speech.create.call_args.kwargs
        assert kwargs["voice"] == "shimmer"

    @patch("homestead_voice.speech.tts.OpenAI")
    def test_unknown_voice_rejected(self, mock_openai: MagicMock) -> None:
        with pytest.raises(ValueError):
            synthesize_speech("hi", "robot")
        mock_openai.return_value.audio.speech.create.assert_not_called()
