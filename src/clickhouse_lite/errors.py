from typing import Any


class ClickHouseError(Exception):
    """Base class for every error raised by clickhouse_lite."""


class QueryPreconditionError(ClickHouseError, ValueError):
    """The statement was rejected locally and never sent."""


class QueryTimeoutError(ClickHouseError, TimeoutError):
    """The caller's deadline ran out before the call could complete."""


class ServerError(ClickHouseError):
    """The server kept answering with a non-2xx status until retries ran out."""

    def __init__(
        self,
        status_code: int,
        message: str,
        statement: str | None = None,
        attempts: int = 1,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.statement = statement
        self.attempts = attempts

    def __str__(self):
        msg = f"Error ({self.status_code}) after {self.attempts} attempt(s): {self.message}"
        if self.statement is not None:
            msg += f"\nQuery: {self.statement}"
        return msg


class DecodeError(ClickHouseError):
    """A 2xx response body could not be turned into a QueryResult."""


class MalformedResponseError(DecodeError):
    """The body is not the {data, meta, rows, statistics} document."""


class RowDecodeError(DecodeError):
    def __init__(self, row_index: int, row_type: Any, errors: list[dict[str, Any]]):
        self.row_index = row_index
        self.row_type = row_type
        self.errors = errors
        type_name = getattr(row_type, "__name__", repr(row_type))
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err.get('loc', ()))}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(f"Row {row_index} does not match {type_name}: {details}")
