"""Application configuration from the environment."""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path


DEFAULT_CLI_DATA_DIR = Path.home() / ".tictac" / "data"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Config:
    data_dir: str | None = None
    auth_secret: str = ""
    debug: bool = False
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            data_dir=os.environ.get("TICTAC_DATA_DIR") or None,
            auth_secret=os.environ.get("TICTAC_AUTH_SECRET", ""),
            debug=os.environ.get("TICTAC_DEBUG", "0").lower() in ("1", "true", "yes"),
            allowed_origins=os.environ.get("ALLOWED_ORIGINS", "*").split(","),
            log_level=os.environ.get("TICTAC_LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_config() -> Config:
    return Config.from_env()


def configure_logging(config: Config | None = None) -> None:
    config = config or get_config()
    logging.basicConfig(
        level=config.log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
