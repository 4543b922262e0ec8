"""Outbound calls to the Apps Script webhook."""
from typing import Iterable, List, Mapping, Optional, Tuple
from scorerelay.models import SubmissionRequest, UpstreamResponse
from scorerelay.services.body import parse_body
from scorerelay.services.validation import format_score
import httpx

SECRET_PARAM = "secret"


def build_query(query_params: Iterable[Tuple[str, str]], secret: str) -> List[Tuple[str, str]]:
    """Forward the caller's query (repeated keys kept) with the shared secret appended."""
    params = [(key, value) for key, value in query_params if key != SECRET_PARAM]
    params.append((SECRET_PARAM, secret))
    return params


def build_upsert_form(submission: SubmissionRequest, secret: str) -> Mapping[str, str]:
    return {
        "action": "upsert",
        "roll": submission.roll,
        "snakeScore": format_score(submission.snake_score),
        "flappyScore": format_score(submission.flappy_score),
        "stackScore": format_score(submission.stack_score),
        SECRET_PARAM: secret,
    }


def create_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """
    Client for talking to the webhook.
    
    Apps Script answers /exec with a redirect to the rendered output, so
    redirects are followed.
    """
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=True)


def _read(response: httpx.Response) -> UpstreamResponse:
    text = response.text
    return UpstreamResponse(
        status_code=response.status_code,
        body_text=text,
        body=parse_body(text),
    )


async def fetch_query(
    client: httpx.AsyncClient,
    url: str,
    query_params: Iterable[Tuple[str, str]],
    secret: str,
) -> UpstreamResponse:
    """GET the webhook with the forwarded query."""
    response = await client.get(url, params=build_query(query_params, secret))
    return _read(response)


async def post_upsert(
    client: httpx.AsyncClient,
    url: str,
    submission: SubmissionRequest,
    secret: str,
) -> UpstreamResponse:
    """POST a URL-encoded upsert form to the webhook."""
    response = await client.post(url, data=build_upsert_form(submission, secret))
    return _read(response)
