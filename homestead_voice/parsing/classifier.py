"""Intent classifier: map a transcript to a command intent using ordered keyword rules."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from homestead_voice.parsing.models import InfrastructureDomain, Intent, ProjectContext

BUSINESS_PLAN_KEYWORDS: tuple[str, ...] = (
    "business plan",
    "business",
    "plan",
    "executive summary",
    "market analysis",
    "financial plan",
    "marketing strategy",
    "operations",
    "management",
    "timeline",
    "risk analysis",
    "sustainability",
)

INFRASTRUCTURE_KEYWORDS: dict[InfrastructureDomain, tuple[str, ...]] = {
    InfrastructureDomain.ELECTRICITY: ("electricity", "power", "electrical", "wiring", "solar"),
    InfrastructureDomain.WATER: ("water", "plumbing", "irrigation", "well", "pump"),
    InfrastructureDomain.BUILDINGS: ("barn", "shed", "greenhouse", "structure", "building"),
    InfrastructureDomain.SOIL: ("soil", "compost", "garden bed", "mulch"),
}

INVENTORY_KEYWORDS: tuple[str, ...] = (
    "inventory",
    "item",
    "supply",
    "supplies",
    "equipment",
    "tool",
    "tools",
    "material",
    "materials",
    "resource",
    "resources",
    "product",
    "products",
    "add to inventory",
    "need",
    "buy",
    "purchase",
    "order",
    "acquire",
    "get",
    "stock",
    "store",
    "warehouse",
    "storage",
    "catalog",
    "catalogue",
)

TASK_KEYWORDS: tuple[str, ...] = (
    "task",
    "todo",
    "to-do",
    "to do",
    "remind me to",
    "remember to",
    "don't forget to",
    "schedule",
    "plan",
    "action item",
    "assignment",
    "job",
    "chore",
    "errand",
    "add a task",
    "create a task",
    "make a task",
    "set a task",
)

PROJECT_KEYWORDS: tuple[str, ...] = ("project", "create project")

PURCHASE_KEYWORDS: tuple[str, ...] = ("buy", "purchase", "need", "get", "order")

# "I have 3 solar panels" / "I already own a tiller", but not "I have to ..."
_OWNERSHIP_STATEMENT_RE = re.compile(
    r"^\s*i\s+(?:already\s+)?(?:have|own)\b(?!\s+to\b)",
    re.IGNORECASE,
)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


@dataclass(frozen=True)
class Signals:
    """Keyword memberships computed once per transcript."""

    has_context: bool
    is_business_plan: bool
    is_inventory: bool
    is_task: bool
    infrastructure: frozenset[InfrastructureDomain]
    mentions_project: bool
    mentions_purchase: bool

    @property
    def is_infrastructure(self) -> bool:
        return bool(self.infrastructure)


def compute_signals(transcript: str, context: ProjectContext | None = None) -> Signals:
    """Scan the lower-cased transcript for every keyword family."""
    lowered = transcript.lower()
    infrastructure = frozenset(
        domain
        for domain, keywords in INFRASTRUCTURE_KEYWORDS.items()
        if _contains_any(lowered, keywords)
    )
    return Signals(
        has_context=context is not None,
        is_business_plan=_contains_any(lowered, BUSINESS_PLAN_KEYWORDS),
        is_inventory=(
            _contains_any(lowered, INVENTORY_KEYWORDS)
            or _OWNERSHIP_STATEMENT_RE.match(transcript) is not None
        ),
        is_task=_contains_any(lowered, TASK_KEYWORDS),
        infrastructure=infrastructure,
        mentions_project=_contains_any(lowered, PROJECT_KEYWORDS),
        mentions_purchase=_contains_any(lowered, PURCHASE_KEYWORDS),
    )


@dataclass(frozen=True)
class ClassificationRule:
    """One step of the ordered decision list."""

    name: str
    intent: Intent
    predicate: Callable[[Signals], bool]

    def matches(self, signals: Signals) -> bool:
        return self.predicate(signals)


# Evaluated top to bottom; the first rule whose predicate holds wins.
RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "business_plan",
        Intent.BUSINESS_PLAN,
        lambda s: s.has_context and s.is_business_plan,
    ),
    ClassificationRule(
        "inventory",
        Intent.INVENTORY,
        lambda s: s.is_inventory and not s.is_task,
    ),
    ClassificationRule(
        "task",
        Intent.TASK,
        lambda s: s.is_task or s.is_infrastructure or (s.has_context and not s.is_inventory),
    ),
    ClassificationRule(
        "project",
        Intent.PROJECT,
        lambda s: not s.has_context and s.mentions_project,
    ),
    ClassificationRule(
        "inventory_fallback",
        Intent.INVENTORY,
        lambda s: s.mentions_purchase,
    ),
    ClassificationRule(
        "default_task",
        Intent.TASK,
        lambda s: True,
    ),
)


@dataclass(frozen=True)
class Classification:
    """Result of intent classification."""

    rule: str
    intent: Intent
    signals: Signals


def classify(transcript: str, context: ProjectContext | None = None) -> Classification:
    """Classify a transcript into a command intent.

    Args:
        transcript: The raw recognised utterance.
        context: The project in view, if any.

    Returns:
        A Classification naming the rule that fired, its intent, and the
        keyword signals (including matched infrastructure domains).
    """
    signals = compute_signals(transcript, context)
    for rule in RULES:
        if rule.matches(signals):
            return Classification(rule=rule.name, intent=rule.intent, signals=signals)

    # The last rule always matches; kept for type checkers.
    return Classification(rule="default_task", intent=Intent.TASK, signals=signals)
