"""
Single-shot HTTP calls against the server. Used by both client flavours.
"""

from dataclasses import dataclass, field

import httpx

from clickhouse_lite.log import get_default_logger
from clickhouse_lite.utils import is_success_status, redact_url
from clickhouse_lite.version import PYTHON_VERSION, __version__

logger = get_default_logger(__name__)

USER_AGENT = f"clickhouse-lite/{__version__} python/{PYTHON_VERSION}"


@dataclass(frozen=True)
class PreparedRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None


@dataclass(frozen=True)
class TransportResult:
    status_code: int
    headers: dict[str, str]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return is_success_status(self.status_code)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "TransportResult":
        return cls(
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            body=response.content,
        )


class HttpTransport:
    """Blocking transport. Opens a fresh httpx.Client for every call.

    Args:
        timeout (float): default timeout in seconds for connect, read, write
            and pool acquisition.
        transport (httpx.BaseTransport | None): lower-level httpx transport,
            e.g. `httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        timeout: float = 300,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout = timeout
        self._transport = transport

    def send(
        self, request: PreparedRequest, timeout: float | None = None
    ) -> TransportResult:
        with httpx.Client(
            timeout=timeout if timeout is not None else self.timeout,
            transport=self._transport,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            response = client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content,
            )
            logger.debug(
                f"{request.method} {redact_url(request.url)} -> {response.status_code}"
            )
            return TransportResult.from_response(response)


class AsyncHttpTransport:
    """Non-blocking counterpart of HttpTransport over httpx.AsyncClient."""

    def __init__(
        self,
        timeout: float = 300,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def send(
        self, request: PreparedRequest, timeout: float | None = None
    ) -> TransportResult:
        async with httpx.AsyncClient(
            timeout=timeout if timeout is not None else self.timeout,
            transport=self._transport,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content,
            )
            logger.debug(
                f"{request.method} {redact_url(request.url)} -> {response.status_code}"
            )
            return TransportResult.from_response(response)
