from typing import Any, Dict, List

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from viper_relay import AAT, HTTPProvider, KeySigner, Node, Session, SessionHeader

DUMMY_URL = "https://dummy.com"

CLIENT_RELAY_RESPONSE = {
    "response": '{"id":67,"jsonrpc":"2.0","result":"0x1a0"}',
    "signature": "f4e1d2c3",
}

CLIENT_RELAY_ERROR = {
    "error": {
        "code": 66,
        "codespace": "viper",
        "message": "the relay request failed: session node not found",
    },
    "dispatch": None,
}


class FakeServicer:
    """In-process servicer node answering the client relay route."""

    def __init__(self) -> None:
        self.status_code = 200
        self.body: Any = CLIENT_RELAY_RESPONSE
        self.requests: List[Dict[str, Any]] = []
        self.headers: List[Dict[str, str]] = []
        self.app = FastAPI()

        @self.app.post("/v1/client/relay")
        async def client_relay(request: Request):
            self.requests.append(await request.json())
            self.headers.append(dict(request.headers))
            if isinstance(self.body, str):
                return PlainTextResponse(self.body, status_code=self.status_code)
            return JSONResponse(self.body, status_code=self.status_code)

    def respond(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body


def make_session(*public_keys: str, height: int = 5) -> Session:
    return Session(
        header=SessionHeader(app_public_key="a1b2", chain="0021", session_height=height),
        nodes=tuple(Node(public_key=key, service_url=DUMMY_URL) for key in public_keys),
        key="session-key",
    )


@pytest.fixture
def servicer() -> FakeServicer:
    return FakeServicer()


@pytest.fixture
def provider(servicer):
    with TestClient(servicer.app) as client:
        yield HTTPProvider(client=client)


@pytest.fixture
def signer() -> KeySigner:
    return KeySigner.generate()


@pytest.fixture
def aat() -> AAT:
    return AAT(
        version="0.0.1",
        app_pub_key="a1b2",
        client_pub_key="c3d4",
        signature="e5f6",
    )
