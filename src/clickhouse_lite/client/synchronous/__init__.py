from clickhouse_lite.client.synchronous.sync_client import ClickHouseClient

__all__ = ["ClickHouseClient"]
