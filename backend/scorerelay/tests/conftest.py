"""Shared fixtures: a fake sheet webhook and relay config."""
import asyncio
import httpx
import pytest
from scorerelay.services.relay import handle
from scorerelay.settings import RelayConfig

SHEET_URL = "https://script.google.com/macros/s/fake/exec"
SHEET_SECRET = "s3cr3t"


class FakeSheet:
    """Stand-in for the Apps Script webhook; records every request it receives."""

    def __init__(self, status_code=200, text='{"status":"ok"}', error=None):
        self.status_code = status_code
        self.text = text
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error("upstream unreachable", request=request)
        return httpx.Response(self.status_code, text=self.text)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self), follow_redirects=True)


@pytest.fixture()
def relay_config():
    return RelayConfig(upstream_url=SHEET_URL, shared_secret=SHEET_SECRET)


@pytest.fixture()
def sheet():
    return FakeSheet()


@pytest.fixture()
def run_relay(relay_config):
    """Run the handler once against a FakeSheet and return the RelayResult."""

    def _run(sheet, method, query=(), body=None, config=None):
        async def _go():
            async with sheet.client() as client:
                return await handle(
                    method,
                    list(query),
                    body or {},
                    config or relay_config,
                    client,
                )
        return asyncio.run(_go())

    return _run
