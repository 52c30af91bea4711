"""Business plan endpoint: draft and segment an executive summary."""

from __future__ import annotations

from anthropic import APIStatusError
from fastapi import APIRouter, HTTPException

from homestead_voice.api.models import ExecutiveSummaryResponse, ProjectProfileRequest
from homestead_voice.business_plan.generator import ProjectProfile, generate_executive_summary
from homestead_voice.business_plan.segmenter import UnparsedSummary

router = APIRouter()


@router.post(
    "/api/business-plan/executive-summary",
    response_model=ExecutiveSummaryResponse,
)
def executive_summary(request: ProjectProfileRequest) -> ExecutiveSummaryResponse:
    """Generate an executive summary for a project with Claude."""
    profile = ProjectProfile(**request.model_dump())

    try:
        summary = generate_executive_summary(profile)
    except APIStatusError as exc:
        raise HTTPException(status_code=503, detail=f"LLM unavailable: {exc.message}") from exc

    if isinstance(summary, UnparsedSummary):
        return ExecutiveSummaryResponse(parsed=False, text=summary.text, reason=summary.reason)

    return ExecutiveSummaryResponse(
        parsed=True,
        mission=summary.mission,
        vision=summary.vision,
        objectives=summary.objectives,
    )
