"""Spoken confirmation messages composed from a command and its created record."""

from __future__ import annotations

from homestead_voice.commands.executor import CreatedRecord
from homestead_voice.parsing.models import (
    InventoryCommand,
    ItemType,
    ParsedCommand,
    ProjectCommand,
    ProjectContext,
    TaskCommand,
)

ERROR_MESSAGE = "I encountered an error processing your request. Please try again."

BUSINESS_PLAN_MESSAGE = (
    "Opening the business plan assistant for your project. "
    "Let's work on developing your business plan together."
)

_ITEM_TYPE_PHRASES: dict[ItemType, str] = {
    ItemType.NEEDED_SUPPLY: "as a needed supply",
    ItemType.OWNED_RESOURCE: "as an owned resource",
    ItemType.BORROWED_OR_RENTAL: "as a borrowed or rental item",
}


def compose_confirmation(
    command: ParsedCommand,
    record: CreatedRecord | None,
    context: ProjectContext | None = None,
) -> str:
    """Build the confirmation sentence read back to the speaker.

    Args:
        command: The parsed command that was executed.
        record: What the executor created (None for the business plan assistant).
        context: The project in view, mentioned by name when present.

    Returns:
        A plain-text confirmation.
    """
    if isinstance(command, TaskCommand) and record is not None:
        message = f'I\'ve created a new task: "{record.title}". '
        if context:
            return message + f'This task has been added to your project "{context.title}".'
        return message + "You can view it in your tasks list."

    if isinstance(command, InventoryCommand) and record is not None:
        item_type = record.item_type or command.item_type
        message = f'I\'ve added "{record.title}" to your inventory {_ITEM_TYPE_PHRASES[item_type]}. '
        if context:
            return message + f'This item has been associated with your project "{context.title}".'
        return message + "You can view it in your inventory list."

    if isinstance(command, ProjectCommand) and record is not None:
        return (
            f'I\'ve created a new project called "{record.title}". '
            "You can now add more details to it."
        )

    return BUSINESS_PLAN_MESSAGE
