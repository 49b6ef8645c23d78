# ==============================================
# MySQLClient
# ==============================================
#
# PURPOSE:
#   Manages the MySQL connection and the handful of SQL
#   operations the uploader needs.
#
# WHY THIS CLASS EXISTS:
#   The reconciler and the upsert writer build their own statements.
#   This class owns the connection, commits every statement that
#   succeeds, rolls back every statement that fails, and answers
#   "which columns does this table have right now?".
#
# CLASS: MySQLClient
# ------------------
#   Stateful — holds connection to MySQL.
#
#   Constructor:
#   ------------
#   - __init__(host, port, user, password, database)
#       Store connection params. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection to the configured database.
#       Raises pymysql.MySQLError if the server is unreachable.
#
#   - disconnect() -> None
#       Close connection cleanly. Safe to call twice.
#
#   - get_table_columns(table_name: str) -> set[str]
#       Column names from INFORMATION_SCHEMA. A table that does not
#       exist has no rows there, so "missing" and "no columns" are the
#       same empty set. No exception is used for that case.
#
#   - execute(query: str, params: tuple = None) -> int
#       Execute one statement and commit. On any error roll back and
#       re-raise. Returns the affected row count.
#
#   - fetch_all(query: str, params: tuple = None) -> list[dict]
#       Execute SELECT and return rows as dicts.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MySQLClient(...) as db:` usage.
#     The connection is released on every exit path.
#
# ==============================================

import logging
from typing import Any, Set, cast

import pymysql
import pymysql.cursors

from player_uploader.config import MySQLConfig

logger = logging.getLogger(__name__)


class MySQLClient:
    def __init__(self, host, port, user, password, database):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connection = None

    @classmethod
    def from_config(cls, config: MySQLConfig) -> "MySQLClient":
        return cls(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database
        )

    def connect(self) -> None:
        self.connection = pymysql.connect(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            database=self.database,
            charset="utf8mb4",
        )
        logger.info("✓ Connected to MySQL %s:%s/%s", self.host, self.port, self.database)

    def disconnect(self) -> None:
        if self.connection:
            self.connection.close()
            self.connection = None
            logger.info("✓ MySQL connection closed")

    def get_table_columns(self, table_name: str) -> Set[str]:
        rows = self.fetch_all(
            "SELECT COLUMN_NAME FROM INFORMATION_SCHEMA.COLUMNS "
            "WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s",
            (self.database, table_name)
        )
        columns = {str(row["COLUMN_NAME"]) for row in rows}
        if not columns:
            logger.info("Table %s doesn't exist or has no columns", table_name)
        return columns

    def execute(self, query: str, params: tuple | None = None) -> int:
        if self.connection is None:
            raise RuntimeError("Not connected to MySQL")
        cursor = self.connection.cursor()
        try:
            affected = cursor.execute(query, params)
            self.connection.commit()
            return affected
        except Exception:
            self.connection.rollback()
            raise
        finally:
            cursor.close()

    def fetch_all(self, query: str, params: tuple | None = None) -> list[dict]:
        if self.connection is None:
            raise RuntimeError("Not connected to MySQL")
        cursor = self.connection.cursor(pymysql.cursors.DictCursor)
        try:
            cursor.execute(query, params)
            return cast(list[dict[str, Any]], cursor.fetchall())
        finally:
            cursor.close()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
