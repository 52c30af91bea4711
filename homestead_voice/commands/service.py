"""Command service: parse a final transcript, execute it, and confirm it aloud."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from homestead_voice.commands.confirmation import compose_confirmation
from homestead_voice.commands.errors import EmptyTranscriptError
from homestead_voice.commands.executor import CommandExecutor, CreatedRecord, execute_command
from homestead_voice.parsing.models import ParsedCommand, ProjectContext
from homestead_voice.parsing.parser import parse_command
from homestead_voice.parsing.tasks import Clock

logger = logging.getLogger(__name__)

Synthesizer = Callable[[str, str | None], bytes]


@dataclass(frozen=True)
class CommandOutcome:
    """Everything produced for one spoken command."""

    command: ParsedCommand
    record: CreatedRecord | None
    message: str
    audio: bytes | None = None


class CommandService:
    """Runs the parse -> execute -> confirm -> speak sequence for one transcript."""

    def __init__(
        self,
        executor: CommandExecutor,
        synthesizer: Synthesizer | None = None,
        voice: str | None = None,
        clock: Clock = date.today,
    ) -> None:
        self.executor = executor
        self.synthesizer = synthesizer
        self.voice = voice
        self.clock = clock

    def handle(
        self,
        transcript: str,
        context: ProjectContext | None = None,
        speak: bool = False,
    ) -> CommandOutcome:
        """Process one final transcript.

        Raises:
            EmptyTranscriptError: If the transcript is blank.
            PersistenceError: If the executor rejects the command.
        """
        if not transcript.strip():
            raise EmptyTranscriptError("Transcript is empty")

        command = parse_command(transcript, context, today=self.clock)
        logger.info("Executing %s command", command.intent.value)

        record = execute_command(command, self.executor)
        message = compose_confirmation(command, record, context)

        audio = self._speak(message) if speak else None
        return CommandOutcome(command=command, record=record, message=message, audio=audio)

    def _speak(self, message: str) -> bytes | None:
        if self.synthesizer is None:
            return None
        try:
            return self.synthesizer(message, self.voice)
        except Exception:
            # The command already succeeded; confirm it without audio.
            logger.exception("Speech synthesis failed")
            return None
