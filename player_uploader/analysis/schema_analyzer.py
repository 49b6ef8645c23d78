# ==============================================
# SchemaAnalyzer
# ==============================================
#
# PURPOSE:
#   Look at a prefix of the player batch and work out every column
#   each table needs before any record is written.
#
# WHY THIS CLASS EXISTS:
#   Player JSON grows new keys between scraper runs (new stats,
#   new card attributes). Columns have to exist before the upserts
#   reference them, so discovery runs once, up front, over a bounded
#   sample of the batch.
#
# CLASS: RequiredColumns
# ----------------------
#   Accumulator passed through the sampling loop.
#
#   Attributes:
#   -----------
#   - columns: dict[TargetTable, dict[str, None]]
#       Insertion-ordered set of column names per table, seeded with
#       BASE_COLUMNS. Order carries no meaning.
#   - observed_types: dict[TargetTable, dict[str, SqlType]]
#       Value-inferred type of the first non-null sample per column.
#       Advisory only: migrations use name-based types.
#
# CLASS: SchemaAnalyzer
# ---------------------
#   Constructor:
#   ------------
#   - __init__(sample_size=100, classifier=None, namer=None)
#
#   Methods:
#   --------
#   - analyze(records: list[dict]) -> RequiredColumns
#       For each of the first min(sample_size, len(records)) records:
#         1. top-level keys → sanitized, routed by FieldClassifier
#         2. keys of a nested "stats" dict → player_statistics
#         3. keys of a nested "attributes" dict → player_profiles
#       Fields that only appear after the sample are never discovered.
#
# ==============================================

import logging
from typing import Any, Dict, List, Optional

from player_uploader.normalization import ColumnNamer, SqlType, TypeInferrer
from .columns import BASE_COLUMNS, TargetTable
from .field_classifier import FieldClassifier

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 100


class RequiredColumns:
    """
    Per-table set of columns the batch needs.
    """

    def __init__(self):
        self.columns: Dict[TargetTable, Dict[str, None]] = {
            table: dict.fromkeys(BASE_COLUMNS[table]) for table in TargetTable
        }
        self.observed_types: Dict[TargetTable, Dict[str, SqlType]] = {
            table: {} for table in TargetTable
        }

    def add(self, table: TargetTable, column: str, sample: Any = None) -> None:
        if not column:
            return
        self.columns[table].setdefault(column, None)
        if sample is not None and column not in self.observed_types[table]:
            self.observed_types[table][column] = TypeInferrer.infer(sample, column)

    def for_table(self, table: TargetTable) -> List[str]:
        return list(self.columns[table])

    def observed_type(self, table: TargetTable, column: str) -> Optional[SqlType]:
        return self.observed_types[table].get(column)

    def __contains__(self, item) -> bool:
        table, column = item
        return column in self.columns[table]


class SchemaAnalyzer:
    """
    Discovers the required columns of every target table from a sample.
    """

    def __init__(
        self,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        classifier: Optional[FieldClassifier] = None,
        namer: Optional[ColumnNamer] = None,
    ):
        if sample_size < 0:
            raise ValueError("sample_size must be >= 0")
        self.sample_size = sample_size
        self.classifier = classifier or FieldClassifier()
        self.namer = namer or ColumnNamer()

    def analyze(self, records: List[dict]) -> RequiredColumns:
        required = RequiredColumns()
        sample = records[:self.sample_size]

        for index, record in enumerate(sample):
            if not isinstance(record, dict):
                logger.warning("Skipping record #%d in schema sample: not an object", index)
                continue
            self._analyze_record(record, required)

        logger.info(
            "Analyzed %d of %d records: %s",
            len(sample),
            len(records),
            ", ".join(f"{t.value}={len(required.columns[t])}" for t in TargetTable),
        )
        return required

    def _analyze_record(self, record: dict, required: RequiredColumns) -> None:
        for key, value in record.items():
            table = self.classifier.classify(str(key)).table
            required.add(table, self.namer.normalize(key), value)

        stats = record.get("stats")
        if isinstance(stats, dict):
            self._add_nested(stats, TargetTable.PLAYER_STATISTICS, required)

        attributes = record.get("attributes")
        if isinstance(attributes, dict):
            self._add_nested(attributes, TargetTable.PLAYER_PROFILES, required)

    def _add_nested(self, nested: dict, table: TargetTable, required: RequiredColumns) -> None:
        for key, value in nested.items():
            required.add(table, self.namer.normalize(key), value)

