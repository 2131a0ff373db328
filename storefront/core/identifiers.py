import uuid


def parse_uuid(value: str) -> str | None:
    """Return the canonical form of a UUID-shaped string, or None."""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError):
        return None
