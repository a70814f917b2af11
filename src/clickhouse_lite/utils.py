import os

import dotenv
import httpx

DEFAULT_URL = "http://localhost:8123"


def from_env(key: str) -> str | None:
    if val := os.getenv(key):
        return val
    dotenv_path = dotenv.find_dotenv(usecwd=True)
    # use DotEnv directly so we can set verbose to False
    return dotenv.main.DotEnv(dotenv_path, verbose=False, encoding="utf-8").get(key)


def resolve_url(url: str | None) -> str:
    """Endpoint passed in, else CLICKHOUSE_URL, else the local default."""
    return url or from_env("CLICKHOUSE_URL") or DEFAULT_URL


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def truncate(text: str, limit: int = 500) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + f"... ({len(text) - limit} more characters)"


def redact_url(url: str) -> str:
    """Hide the password of a credential-bearing URL, for repr and logs."""
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return url
    if parsed.password:
        return str(parsed.copy_with(username=parsed.username, password="***"))
    return url
