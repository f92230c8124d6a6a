from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from intercom_client import Intercom

ENDPOINT = "https://api.intercom.io/"


class Recorder:
    """Handler de `httpx.MockTransport` que guarda cada request.

    Las respuestas se sirven en orden; un callable recibe el request.
    """

    def __init__(self, *responses: httpx.Response | Callable[[httpx.Request], httpx.Response]) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        response = self.responses.pop(0)
        if callable(response):
            return response(request)
        return response


@pytest.fixture
def make_client() -> Callable[..., tuple[Intercom, Recorder]]:
    def _make(*responses: Any, options: dict[str, Any] | None = None) -> tuple[Intercom, Recorder]:
        recorder = Recorder(*responses)
        client = Intercom(
            "app-id",
            "secret-key",
            options,
            transport=httpx.MockTransport(recorder),
        )
        return client, recorder

    return _make


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    # `ClientSettings` lee `.env` del directorio actual.
    monkeypatch.chdir(tmp_path)
    for name in (
        "INTERCOM_APP_ID",
        "INTERCOM_API_KEY",
        "INTERCOM_PERSONAL_ACCESS_TOKEN",
        "INTERCOM_ENDPOINT",
        "INTERCOM_TIMEOUT_MS",
    ):
        monkeypatch.delenv(name, raising=False)
