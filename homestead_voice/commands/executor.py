"""Command executor: persist parsed commands as Supabase records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, cast

from postgrest.exceptions import APIError
from supabase import Client

from homestead_voice.commands.errors import PersistenceError
from homestead_voice.parsing.models import (
    BusinessPlanCommand,
    InventoryCommand,
    ItemType,
    ParsedCommand,
    ProjectCommand,
    TaskCommand,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedRecord:
    """The id and title of a newly created record."""

    id: str
    title: str
    item_type: ItemType | None = None


class CommandExecutor(Protocol):
    """One creation operation per command variant."""

    def create_task(self, command: TaskCommand) -> CreatedRecord: ...

    def create_inventory_item(self, command: InventoryCommand) -> CreatedRecord: ...

    def create_project(self, command: ProjectCommand) -> CreatedRecord: ...

    def open_business_plan(self, command: BusinessPlanCommand) -> None: ...


class SupabaseCommandExecutor:
    """CommandExecutor backed by the ``tasks``, ``items`` and ``projects`` tables."""

    def __init__(self, client: Client, user_id: str | None = None) -> None:
        self.client = client
        self.user_id = user_id

    def _insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        try:
            result = self.client.table(table).insert(row).execute()
        except APIError as exc:
            logger.exception("Insert into %s failed", table)
            raise PersistenceError(f"Could not create {table} record: {exc.message}") from exc

        rows = cast(list[dict[str, Any]], result.data)
        if not rows:
            raise PersistenceError(f"Insert into {table} returned no rows")
        return rows[0]

    def create_task(self, command: TaskCommand) -> CreatedRecord:
        row = {**command.to_record(), "created_by": self.user_id}
        if command.project_id:
            logger.info("Adding task to project %s", command.project_id)
        data = self._insert("tasks", row)
        return CreatedRecord(id=str(data["id"]), title=data["title"])

    def create_inventory_item(self, command: InventoryCommand) -> CreatedRecord:
        row = {**command.to_record(), "added_by": self.user_id}
        if command.project_id:
            logger.info("Adding item to project %s", command.project_id)
        data = self._insert("items", row)
        return CreatedRecord(
            id=str(data["id"]),
            title=data["title"],
            item_type=ItemType(data.get("item_type", command.item_type)),
        )

    def create_project(self, command: ProjectCommand) -> CreatedRecord:
        row = {**command.to_record(), "created_by": self.user_id}
        data = self._insert("projects", row)
        return CreatedRecord(id=str(data["id"]), title=data["title"])

    def open_business_plan(self, command: BusinessPlanCommand) -> None:
        logger.info("Opening business plan assistant for project %s", command.project_id)


def execute_command(command: ParsedCommand, executor: CommandExecutor) -> CreatedRecord | None:
    """Dispatch a parsed command to the matching executor operation.

    Returns:
        The created record, or None for commands that create nothing
        (opening the business plan assistant).
    """
    if isinstance(command, TaskCommand):
        return executor.create_task(command)
    if isinstance(command, InventoryCommand):
        return executor.create_inventory_item(command)
    if isinstance(command, ProjectCommand):
        return executor.create_project(command)
    executor.open_business_plan(command)
    return None
