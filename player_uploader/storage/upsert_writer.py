# ==============================================
# UpsertWriter
# ==============================================
#
# PURPOSE:
#   Write one field map into one table as
#   INSERT ... ON DUPLICATE KEY UPDATE, stamping last_updated.
#
# CLASS: UpsertWriter
# -------------------
#   Constructor:
#   ------------
#   - __init__(mysql_client, table_columns=None)
#       table_columns: live column set per table. When a table's set
#       is known, map keys that are not real columns are dropped
#       instead of failing the whole statement.
#
#   Methods:
#   --------
#   - write(table, fields, label="") -> WriteStatus
#       1. drop MISSING values (and any caller-supplied last_updated)
#       2. drop keys that are not columns of the table (if known)
#       3. nothing left → no-op, SKIPPED
#       4. upsert; key columns are never overwritten,
#          every other column takes the new value, last_updated = NOW()
#       5. any error (MySQL, or the driver failing to encode a
#          value) → rolled back by the client, logged with the
#          label, FAILED. Never raises.
#
#   - set_table_columns(table, columns) -> None
#
#   FUNCTION:
#   - build_upsert_query(table_name, columns, key_columns) -> str
#
# ==============================================

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from player_uploader.analysis.columns import KEY_COLUMNS, TIMESTAMP_COLUMN, TargetTable
from .record_mapper import MISSING, FieldMap

logger = logging.getLogger(__name__)


class WriteStatus(Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


def build_upsert_query(
    table_name: str,
    columns: Sequence[str],
    key_columns: Iterable[str] = ("player_id",),
) -> str:
    keys = set(key_columns)
    column_list = ", ".join(f"`{col}`" for col in (*columns, TIMESTAMP_COLUMN))
    placeholders = ", ".join(["%s"] * len(columns) + ["NOW()"])

    update_parts = [f"`{col}`=VALUES(`{col}`)" for col in columns if col not in keys]
    update_parts.append(f"`{TIMESTAMP_COLUMN}`=NOW()")

    return (
        f"INSERT INTO `{table_name}` ({column_list}) "
        f"VALUES ({placeholders}) "
        f"ON DUPLICATE KEY UPDATE {', '.join(update_parts)}"
    )


class UpsertWriter:
    def __init__(self, mysql_client, table_columns: Optional[Dict[TargetTable, Set[str]]] = None):
        self.mysql_client = mysql_client
        self._table_columns: Dict[TargetTable, Set[str]] = dict(table_columns or {})
        self._reported_unknown: Set[Tuple[TargetTable, str]] = set()

    def set_table_columns(self, table: TargetTable, columns: Iterable[str]) -> None:
        self._table_columns[table] = set(columns)

    def prepare(self, table: TargetTable, fields: FieldMap) -> Dict[str, object]:
        """Return the columns and values that will actually be written."""
        row = {
            column: value
            for column, value in fields.items()
            if value is not MISSING and column != TIMESTAMP_COLUMN
        }

        known = self._table_columns.get(table)
        if known:
            for column in [c for c in row if c not in known]:
                del row[column]
                if (table, column) not in self._reported_unknown:
                    self._reported_unknown.add((table, column))
                    logger.debug("Skipping field %s: no such column in %s", column, table.value)
        return row

    def write(self, table: TargetTable, fields: FieldMap, label: str = "") -> WriteStatus:
        row = self.prepare(table, fields)
        if not row:
            return WriteStatus.SKIPPED

        columns: List[str] = list(row)
        query = build_upsert_query(table.value, columns, KEY_COLUMNS[table])

        try:
            self.mysql_client.execute(query, tuple(row.values()))
        except Exception as e:
            # Log error but continue with other records
            logger.error("✗ Error upserting player %s into %s: %s", label, table.value, e)
            return WriteStatus.FAILED
        return WriteStatus.WRITTEN
