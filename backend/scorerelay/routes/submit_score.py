"""Score submission / leaderboard relay route."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from typing import AsyncIterator
from scorerelay.models import ErrorCode, JsonBody, RelayResult
from scorerelay.settings import RelayConfig, settings
from scorerelay.services.body import decode_request_fields
from scorerelay.services.relay import handle
from scorerelay.services.upstream import create_client
import httpx
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scores"])

# Every method reaches the handler so unsupported ones get a 405 error body
RELAY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def get_relay_config() -> RelayConfig:
    return settings.relay_config()


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with create_client(settings.UPSTREAM_TIMEOUT_SEC) as client:
        yield client


def to_response(result: RelayResult) -> Response:
    """Render a relay result as JSON or raw text."""
    if isinstance(result.payload, JsonBody):
        return JSONResponse(content=result.payload.value, status_code=result.status_code)
    return PlainTextResponse(content=result.payload.value, status_code=result.status_code)


@router.api_route("/submitScore", methods=RELAY_METHODS)
async def submit_score(
    request: Request,
    config: RelayConfig = Depends(get_relay_config),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    """
    Relay endpoint for the arcade front end.
    
    GET forwards leaderboard-style queries; POST submits
    {roll, snakeScore, flappyScore, stackScore} as JSON or form data.
    """
    fields = {}
    if request.method == "POST" and config.is_configured:
        try:
            fields = decode_request_fields(
                await request.body(),
                request.headers.get("content-type", ""),
            )
        except Exception:
            logger.exception("[relay] Failed to read request body")
            return to_response(RelayResult.of_error(500, ErrorCode.SERVER_ERROR))
    
    result = await handle(
        request.method,
        request.query_params.multi_items(),
        fields,
        config,
        client,
    )
    return to_response(result)
