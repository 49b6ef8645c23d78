# ==============================================
# FieldClassifier
# ==============================================
#
# PURPOSE:
#   Decide which of the three player tables a top-level field
#   belongs to, from its raw name alone.
#
# CLASS: FieldClassifier
# ----------------------
#   Stateless — name in, category out.
#
#   Methods:
#   --------
#   - classify(field_name: str) -> FieldCategory
#       RULE 1: name contains a PROFILE keyword   → PROFILE
#       RULE 2: name contains a STATISTIC keyword → STATISTIC
#       RULE 3: everything else                   → GENERIC
#       Matching is a case-insensitive substring test on the RAW
#       (unsanitized) name. Profile wins when both lists match.
#
#   - is_profile_field(field_name: str) -> bool
#   - is_stat_field(field_name: str) -> bool
#
# ==============================================

from typing import Tuple

from .columns import FieldCategory


class FieldClassifier:
    """
    Keyword heuristics that route a field name to a table category.
    """

    PROFILE_KEYWORDS: Tuple[str, ...] = (
        "fullName", "nationality", "birthDate", "height", "weight",
        "preferredFoot", "positions", "skillMoves", "weakFoot",
        "workRate", "bodyType", "realFace", "releaseClause",
        "attributes", "traits", "specialities",
    )

    STAT_KEYWORDS: Tuple[str, ...] = (
        "goals", "assists", "appearances", "minutes", "cards", "overall",
        "pace", "shooting", "passing", "dribbling", "defending", "physical",
        "crossing", "finishing", "heading", "short", "volleys", "curve",
        "freekick", "longpassing", "ballcontrol",
    )

    def __init__(self):
        self._profile = tuple(k.lower() for k in self.PROFILE_KEYWORDS)
        self._stats = tuple(k.lower() for k in self.STAT_KEYWORDS)

    def classify(self, field_name: str) -> FieldCategory:
        if self.is_profile_field(field_name):
            return FieldCategory.PROFILE
        if self.is_stat_field(field_name):
            return FieldCategory.STATISTIC
        return FieldCategory.GENERIC

    def is_profile_field(self, field_name: str) -> bool:
        name = field_name.lower()
        return any(keyword in name for keyword in self._profile)

    def is_stat_field(self, field_name: str) -> bool:
        name = field_name.lower()
        return any(keyword in name for keyword in self._stats)
