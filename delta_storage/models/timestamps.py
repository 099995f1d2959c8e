from datetime import datetime


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp as sent by the API (``Z`` suffix allowed)."""
    if not value:
        return None
    return datetime.fromisoformat(value)
