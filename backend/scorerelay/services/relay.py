"""Score relay: validate, forward to the sheet webhook, translate the answer."""
from typing import Any, Iterable, Mapping, Tuple
from scorerelay.models import ErrorCode, JsonBody, RelayResult
from scorerelay.settings import RelayConfig
from scorerelay.services.upstream import fetch_query, post_upsert
from scorerelay.services.validation import RelayError, validate_submission
import httpx
import logging

logger = logging.getLogger(__name__)


async def relay_query(
    query_params: Iterable[Tuple[str, str]],
    config: RelayConfig,
    client: httpx.AsyncClient,
) -> RelayResult:
    """
    Forward a read-style query (e.g. leaderboard) to the webhook.
    
    The upstream status is not inspected here: whatever comes back is relayed
    with 200, as JSON when it parses and as raw text otherwise.
    """
    upstream = await fetch_query(client, config.upstream_url, query_params, config.shared_secret)
    if not upstream.ok:
        logger.warning(f"[relay] Upstream query answered {upstream.status_code}; relaying as 200")
    if isinstance(upstream.body, JsonBody):
        return RelayResult.of_json(200, upstream.body.value)
    return RelayResult.of_text(200, upstream.body_text)


async def relay_submission(
    body_params: Mapping[str, Any],
    config: RelayConfig,
    client: httpx.AsyncClient,
) -> RelayResult:
    """Validate a score submission and upsert it through the webhook."""
    try:
        submission = validate_submission(body_params)
    except RelayError as e:
        return RelayResult.of_error(e.status_code, e.code)
    
    upstream = await post_upsert(client, config.upstream_url, submission, config.shared_secret)
    
    if isinstance(upstream.body, JsonBody):
        if not upstream.ok:
            logger.warning(f"[relay] Sheet rejected upsert for {submission.roll}: HTTP {upstream.status_code}")
            return RelayResult.of_error(502, ErrorCode.SHEET_ERROR, details=upstream.body.value)
        return RelayResult.of_json(200, {"success": True, "sheet": upstream.body.value})
    
    if not upstream.ok:
        logger.warning(f"[relay] Sheet rejected upsert for {submission.roll}: HTTP {upstream.status_code} (non-JSON body)")
        return RelayResult.of_text(502, upstream.body_text)
    return RelayResult.of_text(200, upstream.body_text)


async def handle(
    method: str,
    query_params: Iterable[Tuple[str, str]],
    body_params: Mapping[str, Any],
    config: RelayConfig,
    client: httpx.AsyncClient,
) -> RelayResult:
    """
    Dispatch one inbound request.
    
    Never raises: misconfiguration, validation failures, upstream failures and
    unexpected errors all come back as a RelayResult with an error code.
    """
    if not config.is_configured:
        logger.error("[relay] SHEETS_WEBHOOK_URL / SHEETS_SECRET not set")
        return RelayResult.of_error(500, ErrorCode.SERVER_NOT_CONFIGURED)
    
    try:
        method = method.upper()
        if method == "GET":
            return await relay_query(query_params, config, client)
        if method == "POST":
            return await relay_submission(body_params, config, client)
        return RelayResult.of_error(405, ErrorCode.METHOD_NOT_ALLOWED)
    except Exception:
        logger.exception("[relay] Proxy error")
        return RelayResult.of_error(500, ErrorCode.SERVER_ERROR)
