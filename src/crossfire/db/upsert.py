"""Dialect-native ``INSERT ... ON CONFLICT`` constructs."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

_CONFLICT_INSERTS: dict[str, Callable[..., Any]] = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def conflict_insert(db: AsyncSession) -> Callable[..., Any]:
    """Return the ``insert`` construct supporting ``on_conflict_*`` for the session's dialect."""
    dialect = db.get_bind().dialect.name
    try:
        return _CONFLICT_INSERTS[dialect]
    except KeyError:
        msg = f"No atomic conditional insert for dialect {dialect!r}"
        raise RuntimeError(msg) from None
