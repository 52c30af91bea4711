"""Data models for parsed voice commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any, ClassVar


class Intent(StrEnum):
    """The coarse action a transcript is mapped to."""

    TASK = "task"
    INVENTORY = "inventory"
    PROJECT = "project"
    BUSINESS_PLAN = "business_plan"


class ItemType(StrEnum):
    """Three-way classification of an inventory entry."""

    NEEDED_SUPPLY = "needed_supply"
    OWNED_RESOURCE = "owned_resource"
    BORROWED_OR_RENTAL = "borrowed_or_rental"

    @property
    def quantity_field(self) -> str:
        """Name of the single quantity column populated for this item type."""
        return _QUANTITY_FIELDS[self]


_QUANTITY_FIELDS: dict[ItemType, str] = {
    ItemType.NEEDED_SUPPLY: "quantity_needed",
    ItemType.OWNED_RESOURCE: "quantity_owned",
    ItemType.BORROWED_OR_RENTAL: "quantity_borrowed",
}


class Priority(StrEnum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(StrEnum):
    TODO = "todo"


class PropertyStatus(StrEnum):
    POTENTIAL_PROPERTY = "potential_property"


class InfrastructureDomain(StrEnum):
    """Infrastructure vocabularies recognised by the classifier."""

    ELECTRICITY = "electricity"
    WATER = "water"
    BUILDINGS = "buildings"
    SOIL = "soil"


@dataclass(frozen=True)
class ProjectContext:
    """The project currently in view when the command was spoken."""

    id: str
    title: str


@dataclass(frozen=True)
class TaskCommand:
    """Create a task."""

    intent: ClassVar[Intent] = Intent.TASK

    title: str
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    description: str | None = None
    due_date: date | None = None
    is_project_task: bool = False
    project_id: str | None = None

    def to_record(self) -> dict[str, Any]:
        """Row for the ``tasks`` table."""
        record: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }
        if self.is_project_task:
            record["is_project_task"] = True
            record["project_id"] = self.project_id
        return record


@dataclass(frozen=True)
class InventoryCommand:
    """Create an inventory item.

    A single ``quantity`` is stored; the ``quantity_*`` properties expose it
    under the column named by ``item_type`` and return ``None`` for the other two.
    """

    intent: ClassVar[Intent] = Intent.INVENTORY

    title: str
    item_type: ItemType = ItemType.NEEDED_SUPPLY
    quantity: int = 1
    tags: tuple[str, ...] | None = None
    fundraiser: bool = False
    project_id: str | None = None

    @property
    def quantity_needed(self) -> int | None:
        return self.quantity if self.item_type is ItemType.NEEDED_SUPPLY else None

    @property
    def quantity_owned(self) -> int | None:
        return self.quantity if self.item_type is ItemType.OWNED_RESOURCE else None

    @property
    def quantity_borrowed(self) -> int | None:
        return self.quantity if self.item_type is ItemType.BORROWED_OR_RENTAL else None

    def to_record(self) -> dict[str, Any]:
        """Row for the ``items`` table (exactly one quantity column)."""
        record: dict[str, Any] = {
            "title": self.title,
            "item_type": self.item_type.value,
            self.item_type.quantity_field: self.quantity,
            "tags": list(self.tags) if self.tags is not None else None,
            "fundraiser": self.fundraiser,
        }
        if self.project_id is not None:
            record["project_id"] = self.project_id
        return record


@dataclass(frozen=True)
class ProjectCommand:
    """Create a project."""

    intent: ClassVar[Intent] = Intent.PROJECT

    title: str
    location: str | None = None
    property_status: PropertyStatus = PropertyStatus.POTENTIAL_PROPERTY

    def to_record(self) -> dict[str, Any]:
        """Row for the ``projects`` table."""
        return {
            "title": self.title,
            "location": self.location,
            "property_status": self.property_status.value,
        }


@dataclass(frozen=True)
class BusinessPlanCommand:
    """Open the business plan assistant for a project."""

    intent: ClassVar[Intent] = Intent.BUSINESS_PLAN

    project_id: str
    query: str

    def to_record(self) -> dict[str, Any]:
        return {"project_id": self.project_id, "query": self.query}


ParsedCommand = TaskCommand | InventoryCommand | ProjectCommand | BusinessPlanCommand
