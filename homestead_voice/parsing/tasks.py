"""Slot extraction for task commands: priority, due date, title, and description."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from homestead_voice.parsing.models import (
    InfrastructureDomain,
    Priority,
    ProjectContext,
    TaskCommand,
)

Clock = Callable[[], date]

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

URGENT_KEYWORDS: tuple[str, ...] = ("urgent", "asap", "emergency")
HIGH_KEYWORDS: tuple[str, ...] = ("high priority", "important")
LOW_KEYWORDS: tuple[str, ...] = ("low priority", "whenever")

_DUE_DATE_RE = re.compile(
    r"\bby (next|this) (monday|tuesday|wednesday|thursday|friday|saturday|sunday|week|month)\b",
    re.IGNORECASE,
)
_PRIORITY_WORDS_RE = re.compile(
    r"\b(?:urgent|high priority|low priority|asap|emergency|important|whenever)\b",
    re.IGNORECASE,
)
_COMMAND_PREFIX_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^add\s+(?:an?\s+)?(?:(?:task|todo)\b\s*(?:to\s+)?)?", re.IGNORECASE),
    re.compile(r"^(?:create|make|set)\s+an?\s+(?:(?:task|todo)\b\s*(?:to\s+)?)?", re.IGNORECASE),
    re.compile(r"^(?:task|todo)\s*:\s*", re.IGNORECASE),
)
_REMIND_ME_RE = re.compile(r"remind me to\s*", re.IGNORECASE)
_LEADING_VERB_RE = re.compile(
    r"^(?:get|add|create|make|set up|setup|install)\s+",
    re.IGNORECASE,
)
_REMAINDER_SPLIT_RE = re.compile(r"\b(?:to|for|in)\b", re.IGNORECASE)

_SYSTEM_LABELS: dict[InfrastructureDomain, str] = {
    InfrastructureDomain.WATER: "water",
    InfrastructureDomain.ELECTRICITY: "electrical",
}


def determine_priority(transcript: str, infrastructure: frozenset[InfrastructureDomain]) -> Priority:
    """Urgent keywords outrank high-priority keywords and infrastructure, which outrank low."""
    lowered = transcript.lower()
    if any(keyword in lowered for keyword in URGENT_KEYWORDS):
        return Priority.URGENT
    if any(keyword in lowered for keyword in HIGH_KEYWORDS) or infrastructure:
        return Priority.HIGH
    if any(keyword in lowered for keyword in LOW_KEYWORDS):
        return Priority.LOW
    return Priority.MEDIUM


def resolve_due_date(transcript: str, today: date) -> date | None:
    """Resolve a ``by next/this <weekday|week|month>`` phrase relative to *today*.

    A weekday resolves to the nearest day with that name on or after today, so
    naming today's weekday yields today.
    """
    match = _DUE_DATE_RE.search(transcript)
    if not match:
        return None

    unit = match.group(2).lower()
    if unit == "week":
        return today + timedelta(days=7)
    if unit == "month":
        return today + relativedelta(months=1)

    days_to_add = (WEEKDAYS.index(unit) - today.weekday()) % 7
    return today + timedelta(days=days_to_add)


def _strip_command_words(transcript: str) -> str:
    title = _DUE_DATE_RE.sub("", transcript, count=1)
    title = _PRIORITY_WORDS_RE.sub("", title)
    title = " ".join(title.split())
    for prefix in _COMMAND_PREFIX_RES:
        title = prefix.sub("", title, count=1)
    title = _REMIND_ME_RE.sub("", title, count=1)
    return title.strip()


def _system_domain(infrastructure: frozenset[InfrastructureDomain]) -> InfrastructureDomain | None:
    if InfrastructureDomain.WATER in infrastructure:
        return InfrastructureDomain.WATER
    if InfrastructureDomain.ELECTRICITY in infrastructure:
        return InfrastructureDomain.ELECTRICITY
    return None


def build_task_title(transcript: str, infrastructure: frozenset[InfrastructureDomain]) -> str:
    """Derive the task title, templating water and electrical infrastructure work."""
    cleaned = _strip_command_words(transcript) or transcript.strip()
    if not infrastructure:
        return cleaned

    without_verb = _LEADING_VERB_RE.sub("", cleaned, count=1) or cleaned
    domain = _system_domain(infrastructure)
    if domain is None:
        return without_verb

    parts = _REMAINDER_SPLIT_RE.split(without_verb)
    remainder = parts[-1].strip() if len(parts) > 1 else ""
    if not remainder:
        return cleaned
    return f"Install {_SYSTEM_LABELS[domain]} system for {remainder}"


def extract_task(
    transcript: str,
    infrastructure: frozenset[InfrastructureDomain] = frozenset(),
    context: ProjectContext | None = None,
    today: Clock = date.today,
) -> TaskCommand:
    """Build a task command from a transcript classified as a task.

    Args:
        transcript: The raw utterance, original casing preserved.
        infrastructure: Infrastructure domains matched during classification.
        context: The project in view; when present the task is always bound to it.
        today: Clock returning the current date, used for due-date phrases.

    Returns:
        A TaskCommand.
    """
    title = build_task_title(transcript, infrastructure)
    description = f"Infrastructure task for {title.lower()}" if infrastructure else None

    return TaskCommand(
        title=title,
        priority=determine_priority(transcript, infrastructure),
        description=description,
        due_date=resolve_due_date(transcript, today()),
        is_project_task=context is not None,
        project_id=context.id if context else None,
    )


def default_task(transcript: str, context: ProjectContext | None = None) -> TaskCommand:
    """Catch-all task: the whole utterance becomes the title."""
    return TaskCommand(
        title=transcript.strip(),
        is_project_task=context is not None,
        project_id=context.id if context else None,
    )
