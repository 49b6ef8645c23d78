# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - fake_mysql        → FakeMySQLClient with the three player tables
#                       holding only their base columns
# - sample_player     → one fully populated scraped player record
# - sample_players    → a small batch of player records
#
# FakeMySQLClient understands exactly the statements the uploader
# generates (ALTER TABLE ... ADD COLUMN and INSERT ... ON DUPLICATE
# KEY UPDATE), enforces the natural keys, and raises pymysql errors
# carrying real MySQL error codes.
# ==============================================

import re
from typing import Dict, List, Optional

import pymysql
import pytest

from player_uploader.analysis.columns import BASE_COLUMNS, KEY_COLUMNS, TargetTable

ADD_COLUMN = re.compile(r"^ALTER TABLE `(\w+)` ADD COLUMN `(\w+)` (.+)$")
UPSERT = re.compile(
    r"^INSERT INTO `(\w+)` \((.+?)\) VALUES \((.+?)\) ON DUPLICATE KEY UPDATE (.+)$"
)
UPDATE_PART = re.compile(r"`(\w+)`=(?:VALUES\(`(\w+)`\)|NOW\(\))")

ER_DUP_FIELDNAME = 1060
ER_BAD_FIELD_ERROR = 1054
ER_NO_SUCH_TABLE = 1146
ER_TRUNCATED_WRONG_VALUE = 1366
ER_PARSE_ERROR = 1064


class FakeMySQLClient:
    """In-memory stand-in for MySQLClient."""

    def __init__(self, tables: Optional[Dict[str, List[str]]] = None, keys=None):
        if tables is None:
            tables = {t.value: list(BASE_COLUMNS[t]) for t in TargetTable}
        self.tables: Dict[str, Dict[str, str]] = {
            name: {col: "BASE" for col in cols} for name, cols in tables.items()
        }
        self.keys = keys or {t.value: KEY_COLUMNS[t] for t in TargetTable}
        self.rows: Dict[str, Dict[tuple, dict]] = {name: {} for name in self.tables}
        self.executed: List[tuple] = []
        self.alters: List[tuple] = []
        self.clock = 0

        # Failure injection
        self.racing_columns = set()     # ADD COLUMN → 1060 (someone else added it)
        self.broken_columns = set()     # ADD COLUMN → 1064
        self.failing_tables = set()     # INSERT → 1366
        self.failing_players = set()    # (table, player_name) → 1366

        self.connected = False

    def connect(self):
        self.connected = True

    def disconnect(self):
        self.connected = False

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    def get_table_columns(self, table_name: str) -> set:
        return set(self.tables.get(table_name, {}))

    def execute(self, query: str, params: tuple | None = None) -> int:
        self.executed.append((query, params))

        # pymysql encodes the interpolated statement before sending it
        for value in params or ():
            if isinstance(value, str):
                value.encode("utf-8")

        match = ADD_COLUMN.match(query)
        if match:
            return self._add_column(*match.groups())

        match = UPSERT.match(query)
        if match:
            return self._upsert(*match.groups(), params=params or ())

        raise AssertionError(f"Unexpected query: {query}")

    def rows_of(self, table: str) -> List[dict]:
        return list(self.rows[table].values())

    def _add_column(self, table: str, column: str, sql_type: str) -> int:
        if column in self.racing_columns:
            self.tables[table][column] = sql_type
            raise pymysql.err.OperationalError(ER_DUP_FIELDNAME, f"Duplicate column name '{column}'")
        if column in self.broken_columns:
            raise pymysql.err.ProgrammingError(ER_PARSE_ERROR, "You have an error in your SQL syntax")
        if table not in self.tables:
            raise pymysql.err.ProgrammingError(ER_NO_SUCH_TABLE, f"Table '{table}' doesn't exist")
        if column in self.tables[table]:
            raise pymysql.err.OperationalError(ER_DUP_FIELDNAME, f"Duplicate column name '{column}'")
        self.tables[table][column] = sql_type
        self.alters.append((table, column, sql_type))
        return 0

    def _upsert(self, table: str, column_list: str, values: str, updates: str, params: tuple) -> int:
        if table not in self.tables:
            raise pymysql.err.ProgrammingError(ER_NO_SUCH_TABLE, f"Table '{table}' doesn't exist")

        columns = [c.strip().strip("`") for c in column_list.split(",")]
        placeholders = [p.strip() for p in values.split(",")]
        for column in columns:
            if column not in self.tables[table]:
                raise pymysql.err.OperationalError(
                    ER_BAD_FIELD_ERROR, f"Unknown column '{column}' in 'field list'"
                )

        self.clock += 1
        supplied = iter(params)
        new_row = {
            col: self.clock if ph == "NOW()" else next(supplied)
            for col, ph in zip(columns, placeholders)
        }

        if table in self.failing_tables or (table, new_row.get("player_name")) in self.failing_players:
            raise pymysql.err.OperationalError(ER_TRUNCATED_WRONG_VALUE, "Incorrect value")

        key = tuple(new_row.get(k) for k in self.keys[table])
        existing = self.rows[table].get(key)
        if existing is None:
            self.rows[table][key] = new_row
            return 1

        for target, source in UPDATE_PART.findall(updates):
            existing[target] = new_row[source] if source else self.clock
        return 2


@pytest.fixture
def fake_mysql():
    return FakeMySQLClient()


@pytest.fixture
def sample_player():
    return {
        "id": 20801,
        "name": "Cristiano Ronaldo",
        "fullName": "Cristiano Ronaldo dos Santos Aveiro",
        "nationality": "Portugal",
        "birthDate": "1985-02-05",
        "height": 187,
        "preferredFoot": "Right",
        "positions": ["ST", "LW"],
        "overall": 86,
        "skillMoves": 5,
        "marketValue": 15000000.5,
        "profileUrl": "https://example.com/players/20801",
        "club": {"id": 112139, "name": "Al Nassr"},
        "league": {"name": "Saudi Pro League"},
        "stats": {"goals": 35, "assists": 11, "Short Passing": 80, "yellowCards": 4},
        "attributes": {"weakFoot": 4, "workRate": "High/Low", "traits": ["Power Header"]},
    }


@pytest.fixture
def sample_players(sample_player):
    return [
        sample_player,
        {
            "id": 158023,
            "name": "Lionel Messi",
            "club": {"id": 112893, "name": "Inter Miami"},
            "league": {"name": "MLS"},
            "stats": {"goals": 20, "assists": 16},
        },
        {"id": 231747, "name": "Kylian Mbappé"},
    ]


@pytest.fixture
def make_fake_mysql():
    return FakeMySQLClient
