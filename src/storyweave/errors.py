"""Error taxonomy shared by all proxy endpoints.

Every failure a request can hit is raised as a ``StoryWeaveError`` subclass.
The exception handlers in ``storyweave.main`` turn them into the JSON error
shape ``{"error": <message>, "classification": <code>}`` with the class's
HTTP status.
"""

QUOTA_KEYWORDS = ("credit", "rate", "quota", "limit")

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
CREDITS_MESSAGE = "AI usage credits depleted. Please add credits to continue."


class StoryWeaveError(Exception):
    """Base class for classified request failures."""

    status_code: int = 500
    classification: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Serialize to the JSON error body."""
        return {"error": self.message, "classification": self.classification}


class ValidationError(StoryWeaveError):
    """Missing or malformed input."""

    status_code = 400
    classification = "validation_error"


class NotFoundError(StoryWeaveError):
    """Referenced row does not exist."""

    status_code = 404
    classification = "not_found"


class ForbiddenError(StoryWeaveError):
    """Caller may not use this endpoint."""

    status_code = 403
    classification = "forbidden"


class ConfigurationError(StoryWeaveError):
    """A required secret is not configured."""

    status_code = 500
    classification = "configuration_error"


class RateLimited(StoryWeaveError):
    """Upstream AI provider returned 429."""

    status_code = 429
    classification = "rate_limited"

    def __init__(self, message: str = RATE_LIMIT_MESSAGE) -> None:
        super().__init__(message)


class CreditsExhausted(StoryWeaveError):
    """Upstream AI provider returned 402."""

    status_code = 402
    classification = "credits_exhausted"

    def __init__(self, message: str = CREDITS_MESSAGE) -> None:
        super().__init__(message)


class QuotaExceeded(StoryWeaveError):
    """Search provider credits or rate limit exhausted."""

    status_code = 429
    classification = "quota_exceeded"


class ExtractionError(StoryWeaveError):
    """Auxiliary AI step produced no usable result."""

    status_code = 500
    classification = "extraction_error"


class UpstreamFailure(StoryWeaveError):
    """Any other non-success or malformed upstream response."""

    status_code = 500
    classification = "upstream_failure"


class EmptyCompletion(UpstreamFailure):
    """AI response arrived but carried no message content."""


def classify_ai_status(status: int) -> StoryWeaveError:
    """Map a non-success AI provider status to an error."""
    if status == 429:
        return RateLimited()
    if status == 402:
        return CreditsExhausted()
    return UpstreamFailure(f"AI API request failed: {status}")


def classify_search_failure(
    status: int,
    error_text: str | None,
    provider: str,
) -> StoryWeaveError:
    """Map a failed search provider response to an error.

    Quota detection matches keywords in the provider's error text as well as
    the 402/429 statuses; the keyword match is best-effort.
    """
    lowered = (error_text or "").lower()
    if status in (402, 429) or any(word in lowered for word in QUOTA_KEYWORDS):
        if status == 402:
            message = f"{provider} credits depleted. Please upgrade your plan."
        else:
            message = f"{provider} rate limit reached. Please try again later."
        return QuotaExceeded(message)
    return UpstreamFailure(error_text or f"{provider} search failed")
