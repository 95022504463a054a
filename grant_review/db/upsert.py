# grant_review/db/upsert.py
"""
Native ``INSERT ... ON CONFLICT DO UPDATE`` keyed on a unique composite key.

Both supported dialects expose the same ``on_conflict_do_update`` API, so the
callers only describe the key and the columns to write.
"""
from typing import Any, TypeVar

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert(
    db: Session,
    model: type[ModelT],
    *,
    keys: dict[str, Any],
    values: dict[str, Any],
) -> ModelT:
    """
    Insert ``keys | values`` or, when a row with ``keys`` already exists,
    overwrite its ``values`` columns. Returns the row as a fresh ORM instance.

    Runs inside the caller's transaction; nothing is committed here.
    """
    dialect = db.get_bind().dialect.name
    try:
        insert = _DIALECT_INSERTS[dialect]
    except KeyError:
        raise NotImplementedError(f"upsert is not supported on {dialect!r}")

    stmt = insert(model).values(**keys, **values)
    stmt = stmt.on_conflict_do_update(index_elements=list(keys), set_=values)
    db.execute(stmt)

    # the row may already sit in the identity map with stale attributes
    return db.query(model).populate_existing().filter_by(**keys).one()
