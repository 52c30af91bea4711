"""Command endpoints: parse a transcript, or parse and execute it."""

from __future__ import annotations

import base64

from fastapi import APIRouter, HTTPException

from homestead_voice.api.models import (
    CommandRequest,
    CommandResponse,
    ParseRequest,
    ParseResponse,
    ProjectContextModel,
)
from homestead_voice.commands.errors import EmptyTranscriptError, PersistenceError
from homestead_voice.commands.executor import SupabaseCommandExecutor
from homestead_voice.commands.service import CommandService
from homestead_voice.config import settings
from homestead_voice.parsing.models import ProjectContext
from homestead_voice.parsing.parser import parse_with_classification
from homestead_voice.speech.tts import synthesize_speech
from homestead_voice.storage import get_supabase_client

router = APIRouter()


def _to_context(project: ProjectContextModel | None) -> ProjectContext | None:
    if project is None:
        return None
    return ProjectContext(id=project.id, title=project.title)


@router.post("/api/commands/parse", response_model=ParseResponse)
async def parse(request: ParseRequest) -> ParseResponse:
    """Classify and extract a transcript without executing it."""
    classification, command = parse_with_classification(
        request.transcript, _to_context(request.project)
    )
    return ParseResponse(
        intent=command.intent,
        rule=classification.rule,
        command=command.to_record(),
    )


@router.post("/api/commands", response_model=CommandResponse)
def execute(request: CommandRequest) -> CommandResponse:
    """Parse a final transcript, create the record it describes, and confirm it.

    Declared sync so FastAPI runs it in the threadpool; the Supabase and
    OpenAI clients block.
    """
    executor = SupabaseCommandExecutor(get_supabase_client(), user_id=request.user_id)
    service = CommandService(
        executor,
        synthesizer=synthesize_speech if settings.openai_api_key else None,
        voice=request.voice.value if request.voice else None,
    )

    try:
        outcome = service.handle(
            request.transcript,
            context=_to_context(request.project),
            speak=request.speak,
        )
    except EmptyTranscriptError as exc:
        raise HTTPException(status_code=422, detail="Transcript is empty") from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message) from exc

    record = outcome.record
    audio = base64.b64encode(outcome.audio).decode("ascii") if outcome.audio else None
    return CommandResponse(
        intent=outcome.command.intent,
        record_id=record.id if record else None,
        title=record.title if record else None,
        item_type=record.item_type if record else None,
        message=outcome.message,
        command=outcome.command.to_record(),
        audio_base64=audio,
    )
