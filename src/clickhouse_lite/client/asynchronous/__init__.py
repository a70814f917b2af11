from clickhouse_lite.client.asynchronous.async_client import AsyncClickHouseClient

__all__ = ["AsyncClickHouseClient"]
