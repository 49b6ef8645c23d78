# ==============================================
# SchemaReconciler
# ==============================================
#
# PURPOSE:
#   Bring a live MySQL table up to the set of columns the batch
#   needs by ADDING the ones that are missing.
#
# WHY THIS CLASS EXISTS:
#   The SchemaAnalyzer says what the data needs; MySQL says what the
#   table has. The difference has to be added before the upserts run.
#   Only additive changes are made: nothing is dropped, renamed or
#   retyped, and tables are never created here.
#
# CLASS: SchemaReconciler
# -----------------------
#   Stateless coordinator around a connected MySQLClient.
#
#   Methods:
#   --------
#   - reconcile(
#         table: TargetTable,
#         existing: set[str],
#         required: list[str],
#         observed: RequiredColumns | None = None
#     ) -> ReconcileResult
#       One ALTER TABLE ... ADD COLUMN per missing column.
#       ER_DUP_FIELDNAME (1060) → counted as already present.
#       Any other MySQL error  → logged, column skipped, loop continues.
#
#   FUNCTION:
#   - column_type_for_name(column_name: str) -> SqlType
#       Type from the column NAME only. Rules are checked in order and
#       the first substring match wins (so "wage" hits "age" first).
#
# ==============================================

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

import pymysql
from pymysql.constants import ER

from player_uploader.analysis.columns import ColumnDescriptor, TargetTable
from player_uploader.analysis.schema_analyzer import RequiredColumns
from player_uploader.normalization import SqlType

logger = logging.getLogger(__name__)

NAME_TYPE_RULES: Tuple[Tuple[Tuple[str, ...], SqlType], ...] = (
    (("id",), SqlType.VARCHAR_50),
    (("name",), SqlType.VARCHAR_255),
    (("date",), SqlType.DATE),
    (("timestamp", "updated", "created"), SqlType.TIMESTAMP),
    (("url",), SqlType.VARCHAR_500),
    (("email",), SqlType.VARCHAR_255),
    (("phone",), SqlType.VARCHAR_20),
    (("age",), SqlType.TINYINT_UNSIGNED),
    (("height", "weight"), SqlType.INT),
    (("price", "value", "wage"), SqlType.MONEY),
    (("rating", "overall"), SqlType.TINYINT_UNSIGNED),
    (("position", "foot"), SqlType.VARCHAR_100),
    (("nationality", "country"), SqlType.VARCHAR_100),
    (("club", "team"), SqlType.VARCHAR_255),
)


def column_type_for_name(column_name: str) -> SqlType:
    name = column_name.lower()
    for keywords, sql_type in NAME_TYPE_RULES:
        if any(keyword in name for keyword in keywords):
            return sql_type
    return SqlType.TEXT


@dataclass
class ReconcileResult:
    """Outcome of reconciling one table."""
    table: str
    added: List[ColumnDescriptor] = field(default_factory=list)
    already_present: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def alterations(self) -> int:
        return len(self.added)


class SchemaReconciler:
    """Adds missing columns, one independent ALTER TABLE at a time."""

    def __init__(self, mysql_client):
        self.mysql_client = mysql_client

    def missing_columns(self, existing: Iterable[str], required: Iterable[str]) -> List[str]:
        existing_set: Set[str] = set(existing)
        return [column for column in required if column and column not in existing_set]

    def reconcile(
        self,
        table: TargetTable,
        existing: Iterable[str],
        required: Iterable[str],
        observed: Optional[RequiredColumns] = None,
    ) -> ReconcileResult:
        result = ReconcileResult(table=table.value)
        missing = self.missing_columns(existing, required)

        if not missing:
            logger.info("No missing columns for table %s", table.value)
            return result

        logger.info("Adding %d missing columns to %s: %s", len(missing), table.value, missing)

        for column_name in missing:
            column = ColumnDescriptor(column_name, column_type_for_name(column_name))
            self._log_type_divergence(table, column, observed)
            try:
                self.mysql_client.execute(build_add_column_query(table.value, column))
            except pymysql.MySQLError as e:
                if e.args and e.args[0] == ER.DUP_FIELDNAME:
                    logger.info("Column %s already exists in %s", column_name, table.value)
                    result.already_present.append(column_name)
                else:
                    logger.error("✗ Error adding column %s to %s: %s", column_name, table.value, e)
                    result.failed[column_name] = str(e)
                continue

            logger.info("✓ Added column: %s (%s) to %s", column.name, column.sql_type, table.value)
            result.added.append(column)

        return result

    def _log_type_divergence(
        self,
        table: TargetTable,
        column: ColumnDescriptor,
        observed: Optional[RequiredColumns],
    ) -> None:
        if observed is None:
            return
        sampled = observed.observed_type(table, column.name)
        if sampled is not None and sampled != column.sql_type:
            logger.debug(
                "Column %s.%s: sampled value suggests %s, using name-based %s",
                table.value, column.name, sampled, column.sql_type,
            )


def build_add_column_query(table_name: str, column: ColumnDescriptor) -> str:
    return f"ALTER TABLE `{table_name}` ADD COLUMN {column.to_ddl()}"
