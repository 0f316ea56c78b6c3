"""svmerge configuration, assembled from environment variables."""

import os

from pydantic import BaseModel, Field


class MergeConfig(BaseModel):
    compression_level: int = Field(default=4, ge=0, le=9)
    progress_interval: int = 100_000  # records between progress log lines
    resolve_same_locus: bool = True


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    merge: MergeConfig = MergeConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


def _build_config() -> AppConfig:
    """Build config from environment variables."""
    return AppConfig(
        merge=MergeConfig(
            compression_level=int(os.environ.get("SVMERGE_COMPRESSION_LEVEL", "4")),
            progress_interval=int(os.environ.get("SVMERGE_PROGRESS_INTERVAL", "100000")),
            resolve_same_locus=os.environ.get("SVMERGE_RESOLVE_SAME_LOCUS", "true").lower()
            not in ("0", "false", "no"),
        ),
        logging=LoggingConfig(
            level=os.environ.get("SVMERGE_LOG_LEVEL", "INFO").upper(),
        ),
        debug=os.environ.get("DEBUG", "").lower() in ("1", "true", "yes"),
    )


config = _build_config()
