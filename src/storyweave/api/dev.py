"""Dev-only diagnostic endpoints."""

import logging

from fastapi import APIRouter

from storyweave.api.dependencies import ApiKeyDep, SettingsDep
from storyweave.api.v1.schemas import (
    ERROR_RESPONSES,
    BatchTestRequest,
    BatchTestResponse,
    ErrorResponse,
)
from storyweave.errors import ForbiddenError
from storyweave.infrastructure.csv_logger import CSVLogger
from storyweave.services.batch_test import BatchTestRunner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dev", tags=["dev"])


@router.post(
    "/research-batch",
    response_model=BatchTestResponse,
    responses={**ERROR_RESPONSES, 403: {"model": ErrorResponse, "description": "Forbidden"}},
)
async def research_batch(
    settings: SettingsDep,
    _auth: ApiKeyDep,
    request: BatchTestRequest | None = None,
) -> BatchTestResponse:
    """Call the research endpoint sequentially and report timings (dev-only).

    Returns:
        Success/failure counts, mean latency and per-call results
    """
    if settings.is_production:
        raise ForbiddenError("Not available in production")

    request = request or BatchTestRequest()
    calls = request.calls or settings.batch_test_calls
    delay_ms = request.delay_ms if request.delay_ms is not None else settings.batch_test_delay_ms

    logger.info(f"Dev research batch triggered: {calls} calls")

    runner = BatchTestRunner(
        target_url=settings.batch_test_target_url,
        calls=calls,
        delay_ms=delay_ms,
        content=settings.batch_test_content,
        csv_logger=CSVLogger(settings.batch_test_csv_path) if settings.batch_test_csv_path else None,
    )
    report = await runner.run()
    return BatchTestResponse.model_validate(report)
