from .client.synchronous.sync_client import ClickHouseClient
from .client.asynchronous.async_client import AsyncClickHouseClient
from .errors import (
    ClickHouseError,
    DecodeError,
    MalformedResponseError,
    QueryPreconditionError,
    QueryTimeoutError,
    RowDecodeError,
    ServerError,
)
from .retry import RetryPolicy
from .types import MetaField, QueryResult, QueryStatistics
from .version import __version__

__all__ = [
    "AsyncClickHouseClient",
    "ClickHouseClient",
    "ClickHouseError",
    "DecodeError",
    "MalformedResponseError",
    "MetaField",
    "QueryPreconditionError",
    "QueryResult",
    "QueryStatistics",
    "QueryTimeoutError",
    "RetryPolicy",
    "RowDecodeError",
    "ServerError",
    "__version__",
]
