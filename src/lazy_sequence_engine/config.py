"""Configuration management for the engine."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional, Union

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class EngineConfig:
    """Engine configuration parameters."""

    thread_name_prefix: str = "lazyseq-producer"
    frame_batch_size: int = 1000
    faker_seed: int = 42
    log_level: str = "INFO"

    @classmethod
    def default(cls) -> "EngineConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Load engine configuration from environment variables."""
        return cls(
            thread_name_prefix=os.getenv("LAZYSEQ_THREAD_NAME_PREFIX", "lazyseq-producer"),
            frame_batch_size=int(os.getenv("LAZYSEQ_FRAME_BATCH_SIZE", "1000")),
            faker_seed=int(os.getenv("LAZYSEQ_FAKER_SEED", "42")),
            log_level=os.getenv("LAZYSEQ_LOG_LEVEL", "INFO").upper(),
        )

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.thread_name_prefix:
            raise ValueError("thread_name_prefix must not be empty")
        if self.frame_batch_size <= 0:
            raise ValueError("frame_batch_size must be positive")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")


def get_engine_config() -> EngineConfig:
    """Get engine configuration."""
    return EngineConfig.from_env()


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """Configure root logging for scripts built on the engine.

    Args:
        level: Logging level; defaults to the configured ``log_level``
    """
    if level is None:
        level = get_engine_config().log_level
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level)
