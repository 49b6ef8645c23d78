# ==============================================
# Player Uploader
# ==============================================
#
# Package Structure (3 Topics + Orchestrator):
#
# player_uploader/
# ├── normalization/    # Topic 1: Column names and value-based types
# ├── analysis/         # Topic 2: Classify fields & discover required columns
# ├── storage/          # Topic 3: Reconcile MySQL schema, map & upsert records
# ├── config.py         # Configuration management
# ├── log_config.py     # Logging setup
# ├── uploader.py       # Batch orchestrator
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
