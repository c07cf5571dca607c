"""Map arbitrary provider failures onto the gateway's error categories."""

import openai

from job_tracker.exceptions import UpstreamError, UpstreamQuotaExceeded, UpstreamUnavailable

QUOTA_ERROR_CODES = frozenset({
    "rate_limit_exceeded",
    "insufficient_quota",
    "tokens_exceeded",
    "resource_exhausted",
})
# Only consulted when the error carries no status code or error code.
QUOTA_MESSAGE_MARKERS = ("rate limit", "rate_limit", "quota", "too many requests")


def _error_code(exc: BaseException) -> str | None:
    for attr in ("code", "type"):
        value = getattr(exc, attr, None)
        if isinstance(value, str) and value:
            return value.lower()
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict):
            for key in ("code", "type"):
                value = inner.get(key)
                if isinstance(value, str) and value:
                    return value.lower()
    return None


def classify_upstream_error(exc: BaseException) -> UpstreamError:
    """Return the UpstreamError that best describes *exc*.

    Structured signals win: openai.RateLimitError, an HTTP 429 status, or a
    rate/quota error code. The message text is inspected only when none of
    those fields exist.
    """
    message = str(exc) or type(exc).__name__
    status = getattr(exc, "status_code", None)
    code = _error_code(exc)

    if isinstance(exc, openai.RateLimitError) or status == 429 or code in QUOTA_ERROR_CODES:
        return UpstreamQuotaExceeded(
            "Analysis quota exceeded, please try again later", detail=message
        )
    if status is None and code is None:
        lowered = message.lower()
        if any(marker in lowered for marker in QUOTA_MESSAGE_MARKERS):
            return UpstreamQuotaExceeded(
                "Analysis quota exceeded, please try again later", detail=message
            )
    return UpstreamUnavailable(f"Failed to analyze job description: {message}", detail=message)
