# tests/conftest.py
"""
Shared fixtures for universe_rag tests.

HTTP traffic never leaves the process: every client is built with an
httpx.MockTransport whose handler records the requests it sees.
"""

from __future__ import annotations

import asyncio
import time
from typing import Iterable, List, Optional, Union

import httpx
import pytest

from universe_rag import UniverseRAG, credential_name

SERVER_URL = "https://store.example"
UNIVERSE = "myuni"
TOKEN = "test-token"
CONFIG = {"serverUrl": SERVER_URL, "universe": UNIVERSE}

Reply = Union[httpx.Response, Exception]


class RecordingHandler:
    """
    MockTransport handler that records requests and replays scripted replies.

    Once the script is exhausted every request gets `200 {"ok": true}`.
    """

    def __init__(self, replies: Optional[Iterable[Reply]] = None):
        self.replies: List[Reply] = list(replies or [])
        self.requests: List[httpx.Request] = []
        self.timestamps: List[float] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.timestamps.append(time.monotonic())

        if not self.replies:
            return httpx.Response(200, json={"ok": True})

        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_rag(handler: RecordingHandler, **config_overrides) -> UniverseRAG:
    """Build and init a client wired to the given handler."""
    config = {**CONFIG, "retry_delay": 0, **config_overrides}
    rag = UniverseRAG(config, transport=httpx.MockTransport(handler))
    asyncio.run(rag.init({credential_name(SERVER_URL): TOKEN}))
    return rag


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def rag(handler: RecordingHandler) -> UniverseRAG:
    return make_rag(handler)
