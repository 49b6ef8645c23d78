# ==============================================
# RecordMapper
# ==============================================
#
# PURPOSE:
#   Flatten one player record into three field maps, one per
#   target table, ready for the UpsertWriter.
#
# CLASS: RecordMapper
# -------------------
#   Methods:
#   --------
#   - map(record: dict) -> MappedRecord
#
#   players:
#     player_id, player_name, club_name, club_id
#     + every other top-level scalar (not id/name/club/stats/attributes)
#   player_profiles:
#     player_id, player_name, full_name (falls back to name),
#     nationality, birth_date, height, preferred_foot,
#     positions (JSON text or NULL)
#     + every key of record["attributes"]
#   player_statistics:
#     player_id, player_name, season, club, competition (league name)
#     + every key of record["stats"]
#
# VALUES:
# -------
#   MISSING  → the record did not have the key; dropped before writing
#   None     → explicit NULL; written
#   list / dict values inside attributes / stats are stored as JSON text
#
# ==============================================

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from player_uploader.analysis.columns import TargetTable
from player_uploader.normalization import ColumnNamer

DEFAULT_SEASON = "2024-25"

# Keys handled explicitly by the players map
RESERVED_KEYS = frozenset({"id", "name", "club", "stats", "attributes"})


class _Missing:
    """Marker for a value the record did not supply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()

FieldValue = Union[None, int, float, str, bool]
FieldMap = Dict[str, Union[FieldValue, _Missing]]


@dataclass
class MappedRecord:
    """The three per-table field maps built from one record."""
    players: FieldMap = field(default_factory=dict)
    player_profiles: FieldMap = field(default_factory=dict)
    player_statistics: FieldMap = field(default_factory=dict)

    def for_table(self, table: TargetTable) -> FieldMap:
        return getattr(self, table.value)

    def items(self) -> Iterator[Tuple[TargetTable, FieldMap]]:
        for table in TargetTable:
            yield table, self.for_table(table)


def to_column_value(value: Any) -> FieldValue:
    """Collapse a JSON value into something pymysql can bind."""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def _nested(record: dict, key: str, attr: str) -> Any:
    # record.get("club", {}).get("name") without tripping on non-dicts
    value = record.get(key)
    if isinstance(value, dict):
        return value.get(attr)
    return None


class RecordMapper:
    def __init__(self, season: str = DEFAULT_SEASON, namer: Optional[ColumnNamer] = None):
        self.season = season
        self.namer = namer or ColumnNamer()

    def map(self, record: dict) -> MappedRecord:
        if not isinstance(record, dict):
            raise ValueError("Player record must be a JSON object")
        return MappedRecord(
            players=self.player_fields(record),
            player_profiles=self.profile_fields(record),
            player_statistics=self.stats_fields(record),
        )

    def player_fields(self, record: dict) -> FieldMap:
        fields: FieldMap = {
            "player_id": record.get("id", MISSING),
            "player_name": record.get("name", MISSING),
            "club_name": _nested(record, "club", "name") or None,
            "club_id": _nested(record, "club", "id") or None,
        }
        for key, value in record.items():
            if key in RESERVED_KEYS or value is None or isinstance(value, (dict, list)):
                continue
            self._put(fields, key, value)
        return fields

    def profile_fields(self, record: dict) -> FieldMap:
        positions = record.get("positions")
        fields: FieldMap = {
            "player_id": record.get("id", MISSING),
            "player_name": record.get("name", MISSING),
            "full_name": record.get("fullName") or record.get("name", MISSING),
            "nationality": record.get("nationality", MISSING),
            "birth_date": record.get("birthDate", MISSING),
            "height": record.get("height", MISSING),
            "preferred_foot": record.get("preferredFoot", MISSING),
            "positions": json.dumps(positions) if isinstance(positions, (list, dict)) or positions else None,
        }
        attributes = record.get("attributes")
        if isinstance(attributes, dict):
            for key, value in attributes.items():
                self._put(fields, key, to_column_value(value))
        return fields

    def stats_fields(self, record: dict) -> FieldMap:
        fields: FieldMap = {
            "player_id": record.get("id", MISSING),
            "player_name": record.get("name", MISSING),
            "season": self.season,
            "club": _nested(record, "club", "name") or None,
            "competition": _nested(record, "league", "name") or None,
        }
        stats = record.get("stats")
        if isinstance(stats, dict):
            for key, value in stats.items():
                self._put(fields, key, to_column_value(value))
        return fields

    def _put(self, fields: FieldMap, key: str, value: Any) -> None:
        column = self.namer.normalize(key)
        if column:
            fields[column] = value
