"""Failure taxonomy for the collaborators around the command parser."""

from __future__ import annotations

RETRY_MESSAGE = "Failed to process voice input. Please try again."


class VoiceCommandError(Exception):
    """Base class for errors reported to the speaker as a generic retryable message."""

    user_message = RETRY_MESSAGE


class RecognitionUnavailableError(VoiceCommandError):
    """The environment offers no speech recognition capability."""

    user_message = "Speech recognition is not supported in this environment."


class RecognitionError(VoiceCommandError):
    """The recognition stream failed mid-utterance."""

    user_message = "Error with speech recognition. Please try again."


class PersistenceError(VoiceCommandError):
    """The command executor rejected the payload."""


class EmptyTranscriptError(VoiceCommandError):
    """Nothing was said, so there is nothing to parse."""
