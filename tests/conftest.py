"""Shared test fixtures."""

import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest
import pytest_asyncio

from neonomics import NeoAPI, NeoClient
from neonomics.oauth import TokenManager, TokenPair

BASE_URL = "https://sandbox.neonomics.io"
TOKEN_PATH = "/auth/realms/sandbox/protocol/openid-connect/token"


class TrackedStream(httpx.AsyncByteStream):
    """Response body that records whether it was read to the end and closed."""

    def __init__(self, content: bytes):
        self.content = content
        self.drained = False
        self.closed = False

    async def __aiter__(self):
        if self.content:
            yield self.content
        self.drained = True

    async def aclose(self) -> None:
        self.closed = True


class ScriptedServer:
    """Answers requests from per-route response queues and records them.

    A route's last response is repeated once the queue runs dry.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], List[Tuple[int, Any]]] = {}
        self.requests: List[httpx.Request] = []
        self.streams: List[TrackedStream] = []

    def add(self, method: str, path: str, *responses: Tuple[int, Any]) -> None:
        self.routes.setdefault((method, path), []).extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": f"no route for {request.method} {request.url.path}"})

        status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(body, Exception):
            raise body
        if body is None:
            content = b""
        elif isinstance(body, str):
            content = body.encode("utf-8")
        elif isinstance(body, bytes):
            content = body
        else:
            content = json.dumps(body).encode("utf-8")
        stream = TrackedStream(content)
        self.streams.append(stream)
        return httpx.Response(status, stream=stream)

    def sent(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


def token_body(access_token: str, refresh_token: str = "refresh-2") -> Dict[str, Any]:
    return {
        "access_token": access_token,
        "expires_in": 300,
        "refresh_expires_in": 1800,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "session_state": "state-1",
    }


def consent_error(code: str = "1426", links: List[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "id": "err-1",
        "errorCode": code,
        "message": "Consent is required",
        "source": "ics",
        "type": "CONSENT",
        "timestamp": 1600000000000,
        "links": links if links is not None else [],
    }


@pytest.fixture
def server():
    return ScriptedServer()


@pytest_asyncio.fixture
async def http(server):
    client = httpx.AsyncClient(transport=httpx.MockTransport(server.handler))
    yield client
    await client.aclose()


@pytest.fixture
def client(http):
    return NeoClient("client-id", "client-secret", BASE_URL, http=http)


@pytest.fixture
def token():
    return TokenPair(access_token="access-1", refresh_token="refresh-1", expires_in=300)


@pytest.fixture
def api(client, token):
    return NeoAPI(client, TokenManager(token), "device-1")
