from clickhouse_lite.client.asynchronous.async_client import AsyncClickHouseClient
from clickhouse_lite.client.synchronous.sync_client import ClickHouseClient

__all__ = ["AsyncClickHouseClient", "ClickHouseClient"]
