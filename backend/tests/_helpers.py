from datetime import datetime


def parse_ts(value: str) -> datetime:
    """Parse an ISO-8601 timestamp from a response body, accepting a trailing Z."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def error_code(body) -> str | None:
    if isinstance(body, dict) and body.get("ok") is False:
        return (body.get("error") or {}).get("code")
    return None


def make_settings(**overrides):
    from user_crud.config import Settings

    values = {
        "ENV": "test",
        "DATABASE_URL": "sqlite://",
        "TEST_DATABASE_URL": "sqlite://",
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)
