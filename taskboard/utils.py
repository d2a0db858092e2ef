import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable


def new_uuid() -> str:
    return str(uuid.uuid4())


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


def unique_id(taken: Iterable[str], factory: Callable[[], str] = new_uuid) -> str:
    """Return an id from ``factory`` that is not already in ``taken``.

    Only sibling uniqueness is guaranteed; ``factory`` is called again until
    it produces an unused value.
    """
    taken = set(taken)
    value = factory()
    while value in taken:
        value = factory()
    return value
