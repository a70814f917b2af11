import json
import logging
from typing import Callable, Generator

import httpx
import pydantic
import pytest

pytest_plugins = ("pytest_asyncio",)

SERVER_URL = "http://localhost:8123"

USERS_BODY = {
    "data": [{"name": "John", "age": 42}, {"name": "Tommy", "age": 34}],
    "meta": [{"name": "name", "type": "String"}, {"name": "age", "type": "Int32"}],
    "rows": 2,
    "statistics": {"bytes_read": 10, "elapsed": 0.01, "rows_read": 2},
}


class User(pydantic.BaseModel):
    name: str
    age: int


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served.

    `responses` are returned in order; the last one repeats once the list
    runs out.
    """

    def __init__(self, responses: list[httpx.Response | Exception]):
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def calls(self) -> int:
        return len(self.requests)


def json_response(body: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))


@pytest.fixture
def users_body() -> dict:
    return json.loads(json.dumps(USERS_BODY))


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    def _make(*responses: httpx.Response | Exception) -> RecordingTransport:
        return RecordingTransport(list(responses))

    return _make


@pytest.fixture
def library_logs(caplog) -> Generator[pytest.LogCaptureFixture, None, None]:
    """caplog wired to every clickhouse_lite logger at DEBUG.

    The library loggers don't propagate, so caplog's handler is attached to
    each of them directly.
    """
    import clickhouse_lite  # noqa: F401  # loggers are created on import

    loggers = [
        logging.getLogger(name)
        for name in list(logging.root.manager.loggerDict)
        if name.startswith("clickhouse_lite")
    ]
    levels = [logger.level for logger in loggers]
    for logger in loggers:
        logger.addHandler(caplog.handler)
        logger.setLevel(logging.DEBUG)
    caplog.set_level(logging.DEBUG)
    yield caplog
    for logger, level in zip(loggers, levels):
        logger.removeHandler(caplog.handler)
        logger.setLevel(level)
