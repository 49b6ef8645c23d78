# ==============================================
# Columns (Data Classes)
# ==============================================
#
# PURPOSE:
#   The fixed table layout the uploader writes into, and the
#   small data classes passed between analysis and storage.
#
# ENUMS:
# ------
# - TargetTable(Enum): PLAYERS, PLAYER_PROFILES, PLAYER_STATISTICS
# - FieldCategory(Enum): PROFILE, STATISTIC, GENERIC
#     Output of the FieldClassifier. Each category maps to one table.
#
# CONSTANTS:
# ----------
# - BASE_COLUMNS: columns every table always has (never removed)
# - KEY_COLUMNS: natural upsert key per table
# - TIMESTAMP_COLUMN: "last_updated", refreshed on every write
#
# CLASSES:
# --------
# - ColumnDescriptor (dataclass)
#     name: str          → sanitized column name
#     sql_type: SqlType  → type chosen when the column was created
#
# ==============================================

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Any, Tuple

from player_uploader.normalization.type_inferrer import SqlType


class TargetTable(Enum):
    PLAYERS = "players"
    PLAYER_PROFILES = "player_profiles"
    PLAYER_STATISTICS = "player_statistics"


class FieldCategory(Enum):
    """
    Which table a top-level field belongs to.

    - PROFILE: biographical / FUT-card attributes → player_profiles
    - STATISTIC: match stats and ratings → player_statistics
    - GENERIC: anything else → players
    """
    PROFILE = "profile"
    STATISTIC = "statistic"
    GENERIC = "generic"

    @property
    def table(self) -> TargetTable:
        return _CATEGORY_TABLES[self]


_CATEGORY_TABLES = {
    FieldCategory.PROFILE: TargetTable.PLAYER_PROFILES,
    FieldCategory.STATISTIC: TargetTable.PLAYER_STATISTICS,
    FieldCategory.GENERIC: TargetTable.PLAYERS,
}

TIMESTAMP_COLUMN = "last_updated"

BASE_COLUMNS: Dict[TargetTable, Tuple[str, ...]] = {
    TargetTable.PLAYERS: (
        "player_id", "player_name", "club_name", "club_id",
        "created_at", TIMESTAMP_COLUMN,
    ),
    TargetTable.PLAYER_PROFILES: (
        "player_id", "player_name", "full_name", "nationality", "birth_date",
        "height", "preferred_foot", "positions", TIMESTAMP_COLUMN,
    ),
    TargetTable.PLAYER_STATISTICS: (
        "player_id", "player_name", "season", "club", "competition",
        TIMESTAMP_COLUMN,
    ),
}

# Assumed to be backed by a UNIQUE / PRIMARY KEY constraint in MySQL
KEY_COLUMNS: Dict[TargetTable, Tuple[str, ...]] = {
    TargetTable.PLAYERS: ("player_id",),
    TargetTable.PLAYER_PROFILES: ("player_id",),
    TargetTable.PLAYER_STATISTICS: ("player_id", "season"),
}


@dataclass(frozen=True)
class ColumnDescriptor:
    """A column the reconciler decided to add."""
    name: str
    sql_type: SqlType

    def to_ddl(self) -> str:
        return f"`{self.name}` {self.sql_type.value}"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "sql_type": self.sql_type.value}
