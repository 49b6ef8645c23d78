# ==============================================
# Tests for UpsertWriter
# ==============================================

import logging

from player_uploader.analysis import TargetTable
from player_uploader.storage import MISSING, UpsertWriter, WriteStatus, build_upsert_query


PLAYERS = TargetTable.PLAYERS
STATS = TargetTable.PLAYER_STATISTICS


class TestBuildUpsertQuery:
    def test_single_key(self):
        query = build_upsert_query("players", ["player_id", "player_name"], ("player_id",))
        assert query == (
            "INSERT INTO `players` (`player_id`, `player_name`, `last_updated`) "
            "VALUES (%s, %s, NOW()) "
            "ON DUPLICATE KEY UPDATE `player_name`=VALUES(`player_name`), `last_updated`=NOW()"
        )

    def test_composite_key_columns_not_updated(self):
        query = build_upsert_query(
            "player_statistics", ["player_id", "season", "goals"], ("player_id", "season")
        )
        update_clause = query.split("ON DUPLICATE KEY UPDATE ")[1]
        assert update_clause == "`goals`=VALUES(`goals`), `last_updated`=NOW()"


class TestUpsertWriter:
    def test_missing_values_dropped_null_kept(self, fake_mysql):
        writer = UpsertWriter(fake_mysql)
        status = writer.write(
            PLAYERS, {"player_id": 7, "player_name": MISSING, "club_name": None}
        )
        assert status is WriteStatus.WRITTEN
        query, params = fake_mysql.executed[-1]
        assert "`player_name`" not in query
        assert params == (7, None)
        row = fake_mysql.rows_of("players")[0]
        assert row["club_name"] is None
        assert row["last_updated"] == 1

    def test_empty_map_is_noop(self, fake_mysql):
        writer = UpsertWriter(fake_mysql)
        assert writer.write(PLAYERS, {}) is WriteStatus.SKIPPED
        assert writer.write(PLAYERS, {"player_id": MISSING}) is WriteStatus.SKIPPED
        assert fake_mysql.executed == []

    def test_caller_timestamp_is_replaced(self, fake_mysql):
        writer = UpsertWriter(fake_mysql)
        writer.write(PLAYERS, {"player_id": 7, "last_updated": "yesterday"})
        query, params = fake_mysql.executed[-1]
        assert query.count("`last_updated`") == 2
        assert params == (7,)

    def test_second_write_overwrites(self, fake_mysql):
        writer = UpsertWriter(fake_mysql)
        writer.write(PLAYERS, {"player_id": 7, "player_name": "Old", "club_name": "A"})
        writer.write(PLAYERS, {"player_id": 7, "player_name": "New", "club_name": "B"})

        rows = fake_mysql.rows_of("players")
        assert len(rows) == 1
        assert rows[0]["player_id"] == 7
        assert rows[0]["player_name"] == "New"
        assert rows[0]["club_name"] == "B"
        assert rows[0]["last_updated"] == 2

    def test_unknown_columns_skipped_when_schema_known(self, fake_mysql):
        writer = UpsertWriter(fake_mysql)
        writer.set_table_columns(PLAYERS, fake_mysql.get_table_columns("players"))

        status = writer.write(PLAYERS, {"player_id": 7, "shirt_sponsor": "Acme"}, label="Seven")

        assert status is WriteStatus.WRITTEN
        assert "shirt_sponsor" not in fake_mysql.rows_of("players")[0]

    def test_unknown_columns_fail_when_schema_unknown(self, fake_mysql, caplog):
        writer = UpsertWriter(fake_mysql)
        with caplog.at_level(logging.ERROR, logger="player_uploader"):
            status = writer.write(PLAYERS, {"player_id": 7, "shirt_sponsor": "Acme"}, label="Seven")

        assert status is WriteStatus.FAILED
        assert "Seven" in caplog.text
        assert fake_mysql.rows_of("players") == []

    def test_database_error_is_contained(self, fake_mysql, caplog):
        fake_mysql.failing_tables.add("player_statistics")
        writer = UpsertWriter(fake_mysql)

        with caplog.at_level(logging.ERROR, logger="player_uploader"):
            status = writer.write(
                STATS, {"player_id": 7, "season": "2024-25", "goals": "many"}, label="Seven"
            )

        assert status is WriteStatus.FAILED
        assert "Seven" in caplog.text
        assert "player_statistics" in caplog.text

    def test_statistics_key_includes_season(self, fake_mysql):
        writer = UpsertWriter(fake_mysql)
        writer.write(STATS, {"player_id": 7, "season": "2023-24"})
        writer.write(STATS, {"player_id": 7, "season": "2024-25"})
        assert len(fake_mysql.rows_of("player_statistics")) == 2
