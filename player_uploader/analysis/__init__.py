# ==============================================
# TOPIC 2: ANALYSIS
# ==============================================
#
# This package decides WHERE each field goes and WHICH columns
# the batch needs, before anything touches MySQL.
#
# Modules:
# --------
# - columns.py           → Table layout, enums and column data classes
# - field_classifier.py  → Route a field name to a table by keywords
# - schema_analyzer.py   → Sample the batch, accumulate required columns
#
# ==============================================

from .columns import (
    BASE_COLUMNS,
    KEY_COLUMNS,
    TIMESTAMP_COLUMN,
    ColumnDescriptor,
    FieldCategory,
    TargetTable,
)
from .field_classifier import FieldClassifier
from .schema_analyzer import RequiredColumns, SchemaAnalyzer

__all__ = [
    "BASE_COLUMNS",
    "KEY_COLUMNS",
    "TIMESTAMP_COLUMN",
    "ColumnDescriptor",
    "FieldCategory",
    "TargetTable",
    "FieldClassifier",
    "RequiredColumns",
    "SchemaAnalyzer",
]
