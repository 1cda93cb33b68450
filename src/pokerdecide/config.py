"""Application configuration for pokerdecide."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from .engine import EngineConfig


@dataclass
class LoggingConfig:
    """Configuration for log output."""

    level: str = "WARNING"

    def __post_init__(self) -> None:
        self.level = self.level.upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown log level: {self.level}")


@dataclass
class Config:
    """Application configuration."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def search_paths() -> list[Path]:
        return [
            Path.cwd() / "pokerdecide.toml",
            Path.cwd() / ".pokerdecide.toml",
            Path.home() / ".config" / "pokerdecide" / "config.toml",
            Path.home() / ".pokerdecide.toml",
        ]

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        """Load config from ``path``, or the first file found, falling back to defaults."""
        if path is not None:
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")
            return cls._from_file(path)

        for candidate in cls.search_paths():
            if candidate.exists():
                return cls._from_file(candidate)

        return cls()

    @classmethod
    def _from_file(cls, path: Path) -> Self:
        """Load config from a TOML file."""
        with open(path, "rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid config file {path}: {e}") from e

        defaults = EngineConfig()
        engine_data = data.get("engine", {})
        engine = EngineConfig(
            aggression=engine_data.get("aggression", defaults.aggression),
            vpip=engine_data.get("vpip", defaults.vpip),
            pfr=engine_data.get("pfr", defaults.pfr),
            seed=engine_data.get("seed"),
        )

        log_data = data.get("logging", {})
        log_config = LoggingConfig(level=str(log_data.get("level", "WARNING")))

        return cls(engine=engine, logging=log_config)

