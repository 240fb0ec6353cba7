"""Configuration schema models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_STORE_FILENAME = "episodes.tsv"
DEFAULT_EXPORT_FILENAME = "canhao_podcast_backup.txt"


class GlobalConfig(BaseModel):
    """Global Canhão Podcast configuration."""

    version: str = "1"
    data_dir: Path | None = None  # If None, uses the platform data dir
    store_filename: str = Field(default=DEFAULT_STORE_FILENAME, min_length=1)
    export_filename: str = Field(default=DEFAULT_EXPORT_FILENAME, min_length=1)
    log_level: LogLevel = "WARNING"

    # Never hand out the same id twice, even within one millisecond
    strict_ids: bool = True
    # Write the private store from a background worker
    background_saves: bool = True
