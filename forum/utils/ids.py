# forum/utils/ids.py
import uuid

from forum.core.errors import InvalidReference


def new_id() -> str:
    return str(uuid.uuid4())


def require_id(value, label: str = "id") -> str:
    """Returns the canonical string form of `value` or raises InvalidReference if it is not a valid identifier."""
    if isinstance(value, uuid.UUID):
        return str(value)
    if not isinstance(value, str) or not value.strip():
        raise InvalidReference(f"Invalid {label}: {value!r}")
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError:
        raise InvalidReference(f"Invalid {label}: {value!r}")
