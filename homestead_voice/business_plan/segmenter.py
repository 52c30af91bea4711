"""Best-effort segmentation of a generated executive summary into sections."""

from __future__ import annotations

import re
from dataclasses import dataclass

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")

MIN_PARAGRAPHS = 3


@dataclass(frozen=True)
class ExecutiveSummary:
    """An executive summary split into its three sections."""

    mission: str
    vision: str
    objectives: str


@dataclass(frozen=True)
class UnparsedSummary:
    """Text that could not be split reliably; kept whole instead of mis-assigned."""

    text: str
    reason: str


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines, dropping empty paragraphs."""
    return [p.strip() for p in _PARAGRAPH_BREAK_RE.split(text.strip()) if p.strip()]


def segment_executive_summary(text: str) -> ExecutiveSummary | UnparsedSummary:
    """Assign paragraphs to mission, vision, and objectives by position.

    The first paragraph is the mission, the second the vision, and everything
    after that the objectives. Fewer than three paragraphs cannot be assigned
    without guessing, so the text is returned as an UnparsedSummary.
    """
    paragraphs = split_paragraphs(text)
    if len(paragraphs) < MIN_PARAGRAPHS:
        return UnparsedSummary(
            text=text.strip(),
            reason=f"expected at least {MIN_PARAGRAPHS} paragraphs, found {len(paragraphs)}",
        )

    return ExecutiveSummary(
        mission=paragraphs[0],
        vision=paragraphs[1],
        objectives="\n\n".join(paragraphs[2:]),
    )
