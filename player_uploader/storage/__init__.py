# ==============================================
# TOPIC 3: STORAGE (MySQL)
# ==============================================
#
# This package handles all database operations:
# connecting, extending table schemas, and upserting players.
#
# Modules:
# --------
# - mysql_client.py       → MySQL connection and raw operations
# - schema_reconciler.py  → Adds missing columns (ALTER TABLE ... ADD COLUMN)
# - record_mapper.py      → Splits a player record into per-table field maps
# - upsert_writer.py      → INSERT ... ON DUPLICATE KEY UPDATE per table
#
# ==============================================

from .mysql_client import MySQLClient
from .schema_reconciler import ReconcileResult, SchemaReconciler, column_type_for_name
from .record_mapper import MISSING, MappedRecord, RecordMapper
from .upsert_writer import UpsertWriter, WriteStatus, build_upsert_query

__all__ = [
    "MySQLClient",
    "ReconcileResult",
    "SchemaReconciler",
    "column_type_for_name",
    "MISSING",
    "MappedRecord",
    "RecordMapper",
    "UpsertWriter",
    "WriteStatus",
    "build_upsert_query",
]
