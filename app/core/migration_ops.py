"""Schema inspection and foreign-key re-pointing helpers for Alembic revisions.

Every helper inspects the live schema first and does nothing when the target
shape is already in place, so revisions built on them can be re-run safely.
Alterations go through batch mode so they also work on SQLite.
"""
from typing import List, Optional

import sqlalchemy as sa
from alembic import op

from app.core.database import naming_convention
from app.core.logging import get_logger


logger = get_logger("alembic.runtime.migration")


def table_names() -> set:
    return set(sa.inspect(op.get_bind()).get_table_names())


def column_names(table: str) -> set:
    if table not in table_names():
        return set()
    return {c["name"] for c in sa.inspect(op.get_bind()).get_columns(table)}


def foreign_keys_on(table: str, column: str) -> List[dict]:
    """Reflected foreign keys whose only constrained column is ``table.column``."""
    inspector = sa.inspect(op.get_bind())
    return [
        fk for fk in inspector.get_foreign_keys(table)
        if fk["constrained_columns"] == [column]
    ]


def _ondelete(fk: dict) -> str:
    return ((fk.get("options") or {}).get("ondelete") or "NO ACTION").upper()


def fk_name(table: str, column: str, referred_table: str) -> str:
    return f"fk_{table}_{column}_{referred_table}"


def points_to(table: str, column: str, referred_table: str, ondelete: Optional[str] = None) -> bool:
    """Whether ``table.column`` has exactly one FK onto ``referred_table.id`` with ``ondelete``."""
    fks = foreign_keys_on(table, column)
    if len(fks) != 1:
        return False
    fk = fks[0]
    if fk["referred_table"] != referred_table or fk["referred_columns"] != ["id"]:
        return False
    return ondelete is None or _ondelete(fk) == ondelete.upper()


def clear_orphans(table: str, column: str, referred_table: str, ondelete: str) -> None:
    """Make existing rows satisfy a new FK: null the column, or delete the row for CASCADE."""
    orphaned = (
        f"{column} IS NOT NULL AND {column} NOT IN (SELECT id FROM {referred_table})"
    )
    if ondelete.upper() == "CASCADE":
        op.execute(sa.text(f"DELETE FROM {table} WHERE {orphaned}"))
    else:
        op.execute(sa.text(f"UPDATE {table} SET {column} = NULL WHERE {orphaned}"))


def repoint_foreign_key(table: str, column: str, referred_table: str, ondelete: str) -> bool:
    """Replace every FK on ``table.column`` with one onto ``referred_table.id``.

    Returns False when the table or column is absent or the FK is already in place.
    """
    if column not in column_names(table):
        return False
    if points_to(table, column, referred_table, ondelete):
        return False

    existing = foreign_keys_on(table, column)
    clear_orphans(table, column, referred_table, ondelete)

    with op.batch_alter_table(table, naming_convention=naming_convention) as batch_op:
        for fk in existing:
            name = fk["name"] or fk_name(table, column, fk["referred_table"])
            batch_op.drop_constraint(name, type_="foreignkey")
        batch_op.create_foreign_key(
            fk_name(table, column, referred_table),
            referred_table,
            [column],
            ["id"],
            ondelete=ondelete,
        )

    logger.info(f"Re-pointed {table}.{column} -> {referred_table}.id (ON DELETE {ondelete})")
    return True


def drop_foreign_keys(table: str, column: str) -> None:
    existing = foreign_keys_on(table, column)
    if not existing:
        return
    with op.batch_alter_table(table, naming_convention=naming_convention) as batch_op:
        for fk in existing:
            name = fk["name"] or fk_name(table, column, fk["referred_table"])
            batch_op.drop_constraint(name, type_="foreignkey")
