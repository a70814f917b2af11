"""
Decoding of `FORMAT JSON` response bodies.

The body is decoded in two steps so that the two failure modes stay apart:
the envelope ({data, meta, rows, statistics}) first, then every row of
`data` into the caller's row type.
"""

import functools
import json
from typing import Any, TypeVar

import pydantic

from clickhouse_lite.errors import MalformedResponseError, RowDecodeError
from clickhouse_lite.log import get_default_logger
from clickhouse_lite.types import QueryResult, ResponseEnvelope
from clickhouse_lite.utils import truncate

logger = get_default_logger(__name__)

T = TypeVar("T")


@functools.lru_cache(maxsize=128)
def _row_adapter(row_type: Any) -> pydantic.TypeAdapter:
    return pydantic.TypeAdapter(row_type)


def row_adapter(row_type: Any) -> pydantic.TypeAdapter:
    try:
        return _row_adapter(row_type)
    except TypeError:
        # unhashable row types, e.g. some typing constructs
        return pydantic.TypeAdapter(row_type)


def decode_envelope(body: bytes | str) -> ResponseEnvelope:
    try:
        payload = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        logger.error(f"Response is not valid JSON: {truncate(text, 200)}")
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    try:
        envelope = ResponseEnvelope.model_validate(payload)
    except pydantic.ValidationError as e:
        logger.error(f"Unexpected response document: {e}")
        raise MalformedResponseError(f"Unexpected response document: {e}") from e

    if envelope.rows != len(envelope.data):
        raise MalformedResponseError(
            f"Server reported {envelope.rows} rows but sent {len(envelope.data)}"
        )
    return envelope


def decode_rows(rows: list[dict[str, Any]], row_type: type[T]) -> list[T]:
    adapter = row_adapter(row_type)
    decoded = []
    for index, row in enumerate(rows):
        try:
            decoded.append(adapter.validate_python(row))
        except pydantic.ValidationError as e:
            error = RowDecodeError(index, row_type, e.errors(include_url=False))
            logger.error(str(error))
            raise error from e
    return decoded


def decode_query_result(
    body: bytes | str, row_type: type[T] = dict
) -> QueryResult[T]:
    """Decode a response body into a QueryResult.

    Args:
        body: raw response body.
        row_type: pydantic model, dataclass, TypedDict or `dict`. Fields are
            matched to row keys by name; keys the type doesn't declare are
            ignored.

    Raises:
        MalformedResponseError: the body is not the expected document.
        RowDecodeError: a row is missing a required field or has a value of
            the wrong type.
    """
    envelope = decode_envelope(body)
    return QueryResult(
        data=decode_rows(envelope.data, row_type),
        meta=envelope.meta,
        rows=envelope.rows,
        statistics=envelope.statistics,
    )
