"""API v1 router aggregator."""

from fastapi import APIRouter

from storyweave.api.v1.research import router as research_router
from storyweave.api.v1.stories import router as stories_router

router = APIRouter(prefix="/api/v1")
router.include_router(stories_router)
router.include_router(research_router)
