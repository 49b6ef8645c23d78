# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - MySQLConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 3306)
#     user: str          (default "root")
#     password: str      (default "root")
#     database: str      (default "players_db")
#
# - UploadConfig (dataclass)
#     input_path: str         (default "data/players.json")
#     sample_size: int        (default 100)
#     season: str             (default "2024-25")
#     progress_interval: int  (default 100)
#
# - AppConfig (dataclass)
#     mysql: MySQLConfig
#     upload: UploadConfig
#     log_level: str     (default "INFO")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from player_uploader.config import get_config
#   config = get_config()
#   print(config.mysql.host)
#   print(config.upload.sample_size)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class MySQLConfig:
    """MySQL database configuration."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "root"
    database: str = "players_db"


@dataclass
class UploadConfig:
    """Settings for one upload run."""
    input_path: str = "data/players.json"
    sample_size: int = 100
    season: str = "2024-25"
    progress_interval: int = 100


@dataclass
class AppConfig:
    """Main application configuration."""
    mysql: MySQLConfig = field(default_factory=MySQLConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build MySQL configuration
    mysql_config = MySQLConfig(
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "3306")),
        user=os.getenv("DB_USER", "root"),
        password=os.getenv("DB_PASSWORD", "root"),
        database=os.getenv("DB_NAME", "players_db")
    )

    # Build upload configuration
    upload_config = UploadConfig(
        input_path=os.getenv("PLAYERS_FILE", "data/players.json"),
        sample_size=int(os.getenv("SCHEMA_SAMPLE_SIZE", "100")),
        season=os.getenv("SEASON", "2024-25"),
        progress_interval=int(os.getenv("PROGRESS_INTERVAL", "100"))
    )

    _config_instance = AppConfig(
        mysql=mysql_config,
        upload=upload_config,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )

    return _config_instance
