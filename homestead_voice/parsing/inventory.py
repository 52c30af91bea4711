"""Slot extraction for inventory commands: quantity, tags, item type, and title."""

from __future__ import annotations

import re
from dataclasses import dataclass

from homestead_voice.parsing.models import InventoryCommand, ItemType, ProjectContext
from homestead_voice.parsing.titles import clean_item_title

_QUANTITY_RE = re.compile(r"\d+")
_TAGS_RE = re.compile(r"tag(?:ged)? (?:as|it) ([\w\s,]+)", re.IGNORECASE)

FUNDRAISER_PHRASES: tuple[str, ...] = ("fundraiser", "fund raise", "need funding", "raise money")

OWNED_TERMS: tuple[str, ...] = (
    "already have",
    "already own",
    "already purchased",
    "already bought",
    "already acquired",
    "in my possession",
    "in possession",
    "in stock",
    "in inventory",
    "owned",
    "own",
    "have",
    "possess",
    "acquired",
    "purchased",
    "bought",
)

BORROWED_TERMS: tuple[str, ...] = (
    "on loan",
    "borrowed",
    "rented",
    "leased",
    "loaned",
    "temporary",
    "rental",
    "lease",
    "borrowing",
    "renting",
    "leasing",
)


def _term_pattern(terms: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(term).replace(r"\ ", r"\s+") for term in terms)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


_OWNED_RE = _term_pattern(OWNED_TERMS)
_BORROWED_RE = _term_pattern(BORROWED_TERMS)


@dataclass(frozen=True)
class TitleRule:
    """A title extraction pattern; ``item_type`` forces the item type when it matches."""

    name: str
    pattern: re.Pattern[str]
    item_type: ItemType | None = None

    def extract(self, transcript: str) -> str:
        match = self.pattern.search(transcript)
        if not match:
            return ""
        return match.group(1).strip()


def _rule(name: str, pattern: str, item_type: ItemType | None = None) -> TitleRule:
    return TitleRule(name, re.compile(pattern, re.IGNORECASE), item_type)


_NEED_TO_BUY = _rule("need_to_buy", r"\bneed\s+to\s+buy\s+(.+)")
_BUY = _rule("buy", r"\bbuy\s+(.+)")
_GET = _rule("get", r"\bget\s+(.+)")
_I_HAVE = _rule("i_have", r"\bi\s+(?:already\s+)?have\s+(.+)", ItemType.OWNED_RESOURCE)
_I_OWN = _rule("i_own", r"\bi\s+(?:already\s+)?own\s+(.+)", ItemType.OWNED_RESOURCE)

INVENTORY_TITLE_RULES: tuple[TitleRule, ...] = (
    _rule("add_to_inventory", r"\badd\s+(.+?)\s+to\s+inventory\b"),
    _rule("add_to_my_inventory", r"\badd\s+(.+?)\s+to\s+my\s+inventory\b"),
    _rule("add_to_inventory_prefix", r"\badd\s+to\s+inventory\s+(.+)"),
    _NEED_TO_BUY,
    _BUY,
    _GET,
    _rule("add_item", r"\badd\s+item:?\s+(.+)"),
    _I_HAVE,
    _I_OWN,
    _rule("add_as_owned", r"\badd\s+(.+?)\s+as\s+owned\b", ItemType.OWNED_RESOURCE),
    _rule("is_owned", r"^(.+?)\s+is\s+owned\b", ItemType.OWNED_RESOURCE),
    _rule("add", r"\badd\s+(.+)"),
)

# Reduced chain used when only a loose purchase verb was heard.
FALLBACK_TITLE_RULES: tuple[TitleRule, ...] = (
    _NEED_TO_BUY,
    _BUY,
    _GET,
    _rule("order", r"\border\s+(.+)"),
    _I_HAVE,
    _I_OWN,
)

_INVENTORY_STOPWORDS_RE = re.compile(
    r"\b(?:add to inventory|need|buy|get|purchase|item|inventory|supply|supplies|equipment"
    r"|tools|tool|materials|material|resources|resource|products|product|stock|store"
    r"|warehouse|storage|catalogue|catalog)\b\s*\d*\s*",
    re.IGNORECASE,
)
_FALLBACK_STOPWORDS_RE = re.compile(r"\b(?:need|buy|get|purchase|order)\b\s*\d*\s*", re.IGNORECASE)
_FUNDRAISER_RE = re.compile(r"(?:fundraiser|fund raise|need funding|raise money)", re.IGNORECASE)

_LEADING_NUMBER_RE = re.compile(r"^\d+\s+")
_TRAILING_INVENTORY_RE = re.compile(r"\s+to\s+(?:my\s+)?inventory.*$", re.IGNORECASE)
_TRAILING_FILLER_RE = re.compile(r"\s+(?:to|for|in|on|at|by|with|the|a|an)$", re.IGNORECASE)


def extract_quantity(transcript: str) -> int:
    """Return the first integer literal in the transcript, or 1."""
    match = _QUANTITY_RE.search(transcript)
    return int(match.group(0)) if match else 1


def extract_tags(transcript: str) -> tuple[str, ...] | None:
    """Parse ``tagged as a, b`` / ``tag it a, b`` phrases."""
    match = _TAGS_RE.search(transcript)
    if not match:
        return None
    tags = tuple(tag.strip() for tag in match.group(1).split(","))
    return tuple(tag for tag in tags if tag) or None


def is_fundraiser(transcript: str) -> bool:
    lowered = transcript.lower()
    return any(phrase in lowered for phrase in FUNDRAISER_PHRASES)


def classify_item_type(transcript: str) -> ItemType:
    """Owned vocabulary wins over borrowed vocabulary; anything else is a needed supply."""
    if _OWNED_RE.search(transcript):
        return ItemType.OWNED_RESOURCE
    if _BORROWED_RE.search(transcript):
        return ItemType.BORROWED_OR_RENTAL
    return ItemType.NEEDED_SUPPLY


def _apply_title_rules(
    transcript: str,
    rules: tuple[TitleRule, ...],
) -> tuple[str, ItemType | None]:
    for rule in rules:
        title = rule.extract(transcript)
        if title:
            return title, rule.item_type
    return "", None


def _fallback_title(transcript: str) -> str:
    title = _INVENTORY_STOPWORDS_RE.sub("", transcript)
    title = _TAGS_RE.sub("", title, count=1)
    title = _FUNDRAISER_RE.sub("", title)
    return title.strip()


def finish_item_title(title: str, transcript: str) -> str:
    """Post-process a raw title capture.

    Strips a leading quantity, a trailing ``to (my) inventory`` clause and a
    single trailing preposition or article, then normalises a leading "I".
    """
    title = _LEADING_NUMBER_RE.sub("", title)
    title = _TRAILING_INVENTORY_RE.sub("", title)
    title = _TRAILING_FILLER_RE.sub("", title)
    title = clean_item_title(" ".join(title.split()))
    return title or transcript.strip()


def extract_inventory(transcript: str, context: ProjectContext | None = None) -> InventoryCommand:
    """Build an inventory command from a transcript classified as inventory.

    Args:
        transcript: The raw utterance, original casing preserved.
        context: The project in view, if any.

    Returns:
        An InventoryCommand with exactly one populated quantity field.
    """
    item_type = classify_item_type(transcript)

    title, forced_type = _apply_title_rules(transcript, INVENTORY_TITLE_RULES)
    if not title:
        title = _fallback_title(transcript)
    if forced_type is not None:
        item_type = forced_type

    return InventoryCommand(
        title=finish_item_title(title, transcript),
        item_type=item_type,
        quantity=extract_quantity(transcript),
        tags=extract_tags(transcript),
        fundraiser=is_fundraiser(transcript),
        project_id=context.id if context else None,
    )


def extract_inventory_fallback(
    transcript: str,
    context: ProjectContext | None = None,
) -> InventoryCommand:
    """Looser inventory extraction for utterances that only carry a purchase verb."""
    item_type = classify_item_type(transcript)

    title, forced_type = _apply_title_rules(transcript, FALLBACK_TITLE_RULES)
    if not title:
        title = _FALLBACK_STOPWORDS_RE.sub("", transcript).strip()
    if forced_type is not None:
        item_type = forced_type

    return InventoryCommand(
        title=finish_item_title(title, transcript),
        item_type=item_type,
        quantity=extract_quantity(transcript),
        project_id=context.id if context else None,
    )
