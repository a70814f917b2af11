"""
Request building and checks shared by the blocking and async clients.
"""

from clickhouse_lite.compression import CONTENT_ENCODING, compress
from clickhouse_lite.errors import QueryPreconditionError
from clickhouse_lite.transport import PreparedRequest, TransportResult

FORMAT_MARKER = "FORMAT JSON"
PING_OK = "Ok.\n"


def check_query(statement: str) -> None:
    """Reject statements that cannot produce a decodable body.

    Raises:
        QueryPreconditionError: the statement is empty or does not ask for
            `FORMAT JSON` output.
    """
    if not statement:
        raise QueryPreconditionError("Query is empty")
    if FORMAT_MARKER not in statement:
        raise QueryPreconditionError(f"Query must contain {FORMAT_MARKER}")


def ping_url(endpoint: str) -> str:
    return endpoint.rstrip("/") + "/ping"


def build_ping_request(endpoint: str) -> PreparedRequest:
    return PreparedRequest(method="GET", url=ping_url(endpoint))


def build_statement_request(
    endpoint: str, statement: str, compress_body: bool = True
) -> PreparedRequest:
    if compress_body:
        return PreparedRequest(
            method="POST",
            url=endpoint,
            headers={"Content-Encoding": CONTENT_ENCODING},
            content=compress(statement),
        )
    return PreparedRequest(
        method="POST",
        url=endpoint,
        headers={"Content-Type": "text/plain; charset=utf-8"},
        content=statement.encode("utf-8"),
    )


def is_ping_ok(result: TransportResult) -> bool:
    return result.text == PING_OK
