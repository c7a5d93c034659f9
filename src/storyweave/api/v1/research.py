"""Research endpoint."""

from fastapi import APIRouter

from storyweave.api.dependencies import ResearchDep
from storyweave.api.v1.schemas import ERROR_RESPONSES, ResearchRequest, ResearchResponse

router = APIRouter(tags=["research"])


@router.post("/research", response_model=ResearchResponse, responses=ERROR_RESPONSES)
async def research(
    request: ResearchRequest,
    service: ResearchDep,
) -> ResearchResponse:
    """Find a short real-world research snippet for story content."""
    result = await service.research(request.content)
    return ResearchResponse(
        summary=result.summary,
        query=result.query,
        citations=result.citations,
    )
