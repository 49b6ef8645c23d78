# ==============================================
# PlayerUploader — Batch Orchestrator
# ==============================================
#
# PURPOSE:
#   Ties the 3 topics together into one upload run over a
#   batch of scraped player records.
#
# HOW IT CONNECTS THE 3 TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                     PlayerUploader                       │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 2: ANALYSIS                            │        │
#   │  │  SchemaAnalyzer (FieldClassifier,            │        │
#   │  │  ColumnNamer, TypeInferrer) → RequiredColumns│        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ required columns per table             │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 3: STORAGE (schema)                    │        │
#   │  │  MySQLClient.get_table_columns →             │        │
#   │  │  SchemaReconciler.reconcile (per table)      │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ live columns                           │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 3: STORAGE (data), record by record    │        │
#   │  │  RecordMapper → UpsertWriter × 3 tables      │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
# FUNCTIONS:
# ----------
#   - load_players(path) -> list[dict]
#       Read and parse the JSON array. Raises PlayerDataError.
#
#   - upload_players(config) -> UploadSummary
#       Open MySQL (released on every exit path), load, run.
#
# CLASS: PlayerUploader
# ---------------------
#   - run(records: list[dict]) -> UploadSummary
#       analyze → reconcile → map + write each record, in order.
#       Only connection / input problems escape; every per-column and
#       per-record failure is logged and the run continues.
#
# ==============================================

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from player_uploader.config import AppConfig, UploadConfig, get_config
from player_uploader.normalization import ColumnNamer
from player_uploader.analysis import SchemaAnalyzer, TargetTable
from player_uploader.storage import (
    MySQLClient,
    RecordMapper,
    SchemaReconciler,
    UpsertWriter,
    WriteStatus,
)

logger = logging.getLogger(__name__)


class PlayerDataError(Exception):
    """The input batch could not be read or is not a JSON array."""


@dataclass
class UploadSummary:
    """Counts for one upload run."""
    records_total: int = 0
    records_processed: int = 0
    writes_ok: Dict[str, int] = field(default_factory=lambda: {t.value: 0 for t in TargetTable})
    writes_failed: Dict[str, int] = field(default_factory=lambda: {t.value: 0 for t in TargetTable})
    columns_added: Dict[str, List[str]] = field(default_factory=lambda: {t.value: [] for t in TargetTable})
    elapsed_seconds: float = 0.0

    @property
    def failed_writes(self) -> int:
        return sum(self.writes_failed.values())

    def to_dict(self) -> dict:
        return {
            "records_total": self.records_total,
            "records_processed": self.records_processed,
            "writes_ok": dict(self.writes_ok),
            "writes_failed": dict(self.writes_failed),
            "columns_added": {k: list(v) for k, v in self.columns_added.items()},
            "elapsed_seconds": self.elapsed_seconds,
        }


def load_players(path) -> List[dict]:
    """
    Read the whole player batch into memory.

    Raises:
        PlayerDataError: file missing/unreadable, malformed JSON,
            or the top-level value is not an array.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise PlayerDataError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PlayerDataError(f"Malformed JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise PlayerDataError(f"{path} must contain a JSON array of players")
    return data


class PlayerUploader:
    """
    Runs schema discovery, schema reconciliation and the upserts
    over one batch, on an already connected MySQLClient.
    """

    def __init__(self, mysql_client, upload_config: Optional[UploadConfig] = None):
        self._config = upload_config or UploadConfig()
        self._mysql_client = mysql_client

        namer = ColumnNamer()
        self._analyzer = SchemaAnalyzer(sample_size=self._config.sample_size, namer=namer)
        self._reconciler = SchemaReconciler(mysql_client)
        self._mapper = RecordMapper(season=self._config.season, namer=namer)
        self._writer = UpsertWriter(mysql_client)

    def run(self, records: List[dict]) -> UploadSummary:
        start_time = time.time()
        summary = UploadSummary(records_total=len(records))
        logger.info("Processing %d players...", len(records))

        self.prepare_schema(records, summary)

        interval = max(self._config.progress_interval, 1)
        for index, record in enumerate(records):
            if index % interval == 0:
                logger.info("Processed %d players...", index)
            self.upload_record(record, summary)
            summary.records_processed += 1

        summary.elapsed_seconds = round(time.time() - start_time, 3)
        logger.info(
            "✓ Uploaded %d players in %.2fs (%d failed writes)",
            summary.records_processed, summary.elapsed_seconds, summary.failed_writes,
        )
        return summary

    def prepare_schema(self, records: List[dict], summary: Optional[UploadSummary] = None) -> None:
        """Discover required columns and add the missing ones, table by table."""
        logger.info("Analyzing data structure and creating missing columns...")
        required = self._analyzer.analyze(records)

        for table in TargetTable:
            existing = self._mysql_client.get_table_columns(table.value)
            result = self._reconciler.reconcile(
                table, existing, required.for_table(table), observed=required
            )
            if summary is not None:
                summary.columns_added[table.value].extend(c.name for c in result.added)

            # Re-read so the writer sees exactly what the table has now
            self._writer.set_table_columns(table, self._mysql_client.get_table_columns(table.value))

    def upload_record(self, record: dict, summary: Optional[UploadSummary] = None) -> None:
        label = record.get("name") if isinstance(record, dict) else None
        try:
            mapped = self._mapper.map(record)
        except ValueError as e:
            logger.error("✗ Error mapping player %s: %s", label, e)
            if summary is not None:
                for table in TargetTable:
                    summary.writes_failed[table.value] += 1
            return

        for table, fields in mapped.items():
            status = self._writer.write(table, fields, label=str(label))
            if summary is None:
                continue
            if status is WriteStatus.WRITTEN:
                summary.writes_ok[table.value] += 1
            elif status is WriteStatus.FAILED:
                summary.writes_failed[table.value] += 1


def upload_players(config: Optional[AppConfig] = None, input_path=None) -> UploadSummary:
    """
    Full run: connect, load the batch, upload, disconnect.

    Raises:
        PlayerDataError: bad input file.
        pymysql.MySQLError: database unreachable.
    """
    config = config or get_config()
    path = input_path or config.upload.input_path

    logger.info("Connecting to database...")
    with MySQLClient.from_config(config.mysql) as client:
        players = load_players(path)
        summary = PlayerUploader(client, config.upload).run(players)

    logger.info("Successfully uploaded all player data to database!")
    return summary
