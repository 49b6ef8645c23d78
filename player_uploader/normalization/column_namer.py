# ==============================================
# ColumnNamer
# ==============================================
#
# PURPOSE:
#   Convert arbitrary JSON field names into safe MySQL column
#   identifiers before they are used in DDL or DML.
#
# WHY THIS CLASS EXISTS:
#   Scraped player data arrives with names like "skillMoves",
#   "Short Passing", "weak-foot" or "PAC%". Column names are
#   interpolated into ALTER / INSERT statements, so they must be
#   reduced to a bounded, quoting-safe alphabet first.
#
# CLASS: ColumnNamer
# ------------------
#   Keeps a registry of raw name -> column name.
#
#   Methods:
#   --------
#   - normalize(name: str) -> str
#       Sanitize one field name (cached).
#
#   - get_mappings() -> dict[str, str]
#       Every raw name seen so far and its column name.
#
# RULES:
# ------
#   1. Every character outside [a-zA-Z0-9] → "_"
#   2. Lowercase                 (skillMoves → skillmoves)
#   3. Collapse multiple "_"     (weak--foot → weak_foot)
#   4. Strip leading/trailing "_"
#   5. Truncate to 64 characters (MySQL identifier limit)
#
# ==============================================

import re
from typing import Dict

MAX_COLUMN_NAME_LENGTH = 64

_NON_ALPHANUMERIC = re.compile(r'[^a-zA-Z0-9]')
_UNDERSCORE_RUN = re.compile(r'_+')


def sanitize_column_name(name: str) -> str:
    """
    Reduce a raw field name to a MySQL-safe column name.

    Idempotent: sanitize_column_name(sanitize_column_name(x)) == sanitize_column_name(x).
    May return "" for names without any alphanumeric character.
    """
    name = _NON_ALPHANUMERIC.sub('_', str(name))
    name = name.lower()
    name = _UNDERSCORE_RUN.sub('_', name)
    name = name.strip('_')
    # Truncation can expose an underscore at the cut
    return name[:MAX_COLUMN_NAME_LENGTH].rstrip('_')


class ColumnNamer:
    """
    Sanitizes field names and remembers every mapping it produced.
    """

    def __init__(self):
        self._mappings: Dict[str, str] = {}

    def normalize(self, name: str) -> str:
        """
        Args:
            name: Raw field name (e.g., "skillMoves", "Short Passing")

        Returns:
            Column name (e.g., "skillmoves", "short_passing")
        """
        if name in self._mappings:
            return self._mappings[name]

        column_name = sanitize_column_name(name)
        self._mappings[name] = column_name
        return column_name

    def get_mappings(self) -> Dict[str, str]:
        return self._mappings.copy()
