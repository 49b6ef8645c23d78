# ==============================================
# TOPIC 1: NORMALIZATION
# ==============================================
#
# This package turns raw JSON field names and values into
# things MySQL understands, BEFORE analysis decides where
# they go.
#
# Modules:
# --------
# - column_namer.py   → Sanitize field names into column names
# - type_inferrer.py  → Map a sample value to a MySQL column type
#
# ==============================================

from .column_namer import ColumnNamer, sanitize_column_name
from .type_inferrer import SqlType, TypeInferrer

__all__ = ["ColumnNamer", "sanitize_column_name", "SqlType", "TypeInferrer"]
