from stowtrack.exceptions import InvalidArgumentError


def require_text(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{label} must not be empty.")
    return value
