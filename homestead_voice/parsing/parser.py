"""End-to-end voice command parsing: classify -> extract -> ParsedCommand."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from homestead_voice.parsing.classifier import Classification, classify
from homestead_voice.parsing.inventory import extract_inventory, extract_inventory_fallback
from homestead_voice.parsing.models import ParsedCommand, ProjectContext
from homestead_voice.parsing.projects import extract_business_plan, extract_project
from homestead_voice.parsing.tasks import Clock, default_task, extract_task

logger = logging.getLogger(__name__)

Extractor = Callable[[str, Classification, ProjectContext | None, Clock], ParsedCommand]


def _business_plan(
    transcript: str, classification: Classification, context: ProjectContext | None, today: Clock
) -> ParsedCommand:
    if context is None:
        raise ValueError("business plan commands require a project context")
    return extract_business_plan(transcript, context)


def _inventory(
    transcript: str, classification: Classification, context: ProjectContext | None, today: Clock
) -> ParsedCommand:
    return extract_inventory(transcript, context)


def _task(
    transcript: str, classification: Classification, context: ProjectContext | None, today: Clock
) -> ParsedCommand:
    return extract_task(transcript, classification.signals.infrastructure, context, today)


def _project(
    transcript: str, classification: Classification, context: ProjectContext | None, today: Clock
) -> ParsedCommand:
    return extract_project(transcript)


def _inventory_fallback(
    transcript: str, classification: Classification, context: ProjectContext | None, today: Clock
) -> ParsedCommand:
    return extract_inventory_fallback(transcript, context)


def _default_task(
    transcript: str, classification: Classification, context: ProjectContext | None, today: Clock
) -> ParsedCommand:
    return default_task(transcript, context)


# Keyed by classifier rule name (see classifier.RULES).
EXTRACTORS: dict[str, Extractor] = {
    "business_plan": _business_plan,
    "inventory": _inventory,
    "task": _task,
    "project": _project,
    "inventory_fallback": _inventory_fallback,
    "default_task": _default_task,
}


def parse_with_classification(
    transcript: str,
    context: ProjectContext | None = None,
    today: Clock | None = None,
) -> tuple[Classification, ParsedCommand]:
    """Classify and extract, returning the classification alongside the command."""
    classification = classify(transcript, context)
    extractor = EXTRACTORS[classification.rule]
    command = extractor(transcript, classification, context, today or date.today)
    logger.debug(
        "Parsed %r as %s via rule %s", transcript, command.intent.value, classification.rule
    )
    return classification, command


def parse_command(
    transcript: str,
    context: ProjectContext | None = None,
    today: Clock | None = None,
) -> ParsedCommand:
    """Turn a spoken transcript into a structured command.

    This is a pure function of its inputs: it performs no I/O and never raises
    for unrecognised input, falling back to a task titled with the transcript.

    Args:
        transcript: The final recognised utterance.
        context: The project currently in view, if any.
        today: Clock used for due-date phrases; defaults to ``date.today``.

    Returns:
        A TaskCommand, InventoryCommand, ProjectCommand, or BusinessPlanCommand.
    """
    _, command = parse_with_classification(transcript, context, today)
    return command
