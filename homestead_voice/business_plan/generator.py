"""Claude-powered executive summary drafting for the business plan assistant."""

from __future__ import annotations

from dataclasses import dataclass, field

from anthropic import Anthropic
from anthropic.types import TextBlock

from homestead_voice.business_plan.segmenter import (
    ExecutiveSummary,
    UnparsedSummary,
    segment_executive_summary,
)
from homestead_voice.config import settings

SYSTEM_PROMPT = (
    "You are an expert in permaculture business planning and sustainable enterprise "
    "development. Write like a professional consultant, not an AI.\n\n"
    "Formatting rules:\n"
    "- No markdown: no # headers, no * bullets or emphasis.\n"
    "- Plain paragraphs separated by a single blank line.\n"
    "- First paragraph: the mission statement. Second paragraph: the vision. "
    "Remaining paragraphs: the key objectives."
)

NOT_SPECIFIED = "Not specified"


@dataclass
class ProjectProfile:
    """The project details an executive summary is written from."""

    title: str
    location: str | None = None
    property_status: str = "potential_property"
    values_mission_goals: str | None = None
    category: str | None = None
    funding_needs: str | None = None
    guilds: list[str] = field(default_factory=list)
    water: str | None = None
    soil: str | None = None
    power: str | None = None
    structures: list[str] = field(default_factory=list)


def build_prompt(profile: ProjectProfile) -> str:
    """Render the project profile as the user prompt."""
    property_status = (
        "Owned Land" if profile.property_status == "owned_land" else "Potential Property"
    )
    return (
        "Create a detailed executive summary for a permaculture project with the "
        "following details:\n\n"
        f"Title: {profile.title}\n"
        f"Location: {profile.location or 'Location not specified'}\n"
        f"Property Status: {property_status}\n"
        f"Values, Mission & Goals: {profile.values_mission_goals or NOT_SPECIFIED}\n"
        f"Category: {profile.category or NOT_SPECIFIED}\n"
        f"Funding Needs: {profile.funding_needs or NOT_SPECIFIED}\n\n"
        f"Guilds/Elements: {', '.join(profile.guilds) or 'None specified'}\n\n"
        f"Water Systems: {profile.water or NOT_SPECIFIED}\n"
        f"Soil Management: {profile.soil or NOT_SPECIFIED}\n"
        f"Power Systems: {profile.power or NOT_SPECIFIED}\n\n"
        f"Structures: {', '.join(profile.structures) or 'None specified'}\n\n"
        "The executive summary should include a mission statement, vision, and key "
        "objectives for the project."
    )


def generate_executive_summary(profile: ProjectProfile) -> ExecutiveSummary | UnparsedSummary:
    """Draft an executive summary with Claude and split it into sections.

    Args:
        profile: The project to summarise.

    Returns:
        The segmented summary, or an UnparsedSummary when Claude's reply does
        not have enough paragraphs to assign sections.
    """
    client = Anthropic(api_key=settings.anthropic_api_key)
    response = client.messages.create(
        model=settings.llm_model,
        max_tokens=1000,
        system=SYSTEM_PROMPT,
        messages=[{"role": "user", "content": build_prompt(profile)}],
    )

    block = response.content[0]
    if not isinstance(block, TextBlock):
        raise ValueError(f"Expected TextBlock from Claude, got {type(block).__name__}")

    return segment_executive_summary(block.text)
