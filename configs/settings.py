"""Configuration loading for swing-trends."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from configs.validator import validate_config
from exceptions import ConfigError, InvalidConfigError
from ingest.coercion import resolve_timezone
from log_config.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default.yaml"


@dataclass(frozen=True)
class IngestConfig:
    header_scan_rows: int
    encoding: str
    strict: bool = False


@dataclass(frozen=True)
class DatesConfig:
    timezone: str
    dayfirst: bool = False


@dataclass(frozen=True)
class BatchConfig:
    max_workers: int


@dataclass(frozen=True)
class AnalysisConfig:
    view_by_session: bool
    show_trend_lines: bool
    max_comparison_players: int


@dataclass(frozen=True)
class StorageConfig:
    path: str
    key: str


@dataclass(frozen=True)
class ReportConfig:
    dpi: int


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    log_dir: Optional[str] = None


@dataclass(frozen=True)
class AppConfig:
    ingest: IngestConfig
    dates: DatesConfig
    batch: BatchConfig
    analysis: AnalysisConfig
    storage: StorageConfig
    report: ReportConfig
    logging: LoggingConfig


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file (default: configs/default.yaml)

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        logger.debug(f"Loading configuration from {path}")
        if not path.exists():
            raise InvalidConfigError(f"Configuration file not found: {path}")

        data = yaml.safe_load(path.read_text()) or {}

        # Validate against JSON Schema, filling defaults
        validate_config(data)

    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")
    except OSError as e:
        logger.error(f"Could not read configuration file: {e}")
        raise InvalidConfigError(f"Could not read configuration file: {e}")

    try:
        config = AppConfig(
            ingest=IngestConfig(**data["ingest"]),
            dates=DatesConfig(**data["dates"]),
            batch=BatchConfig(**data["batch"]),
            analysis=AnalysisConfig(**data["analysis"]),
            storage=StorageConfig(**data["storage"]),
            report=ReportConfig(**data["report"]),
            logging=LoggingConfig(**data["logging"]),
        )
    except (KeyError, TypeError) as e:
        logger.error(f"Failed to construct configuration objects: {e}")
        raise InvalidConfigError(f"Failed to construct configuration: {e}")

    try:
        resolve_timezone(config.dates.timezone)
    except ValueError as e:
        logger.error(f"Invalid dates.timezone in {path}: {e}")
        raise InvalidConfigError(f"Invalid dates.timezone: {e}") from e

    logger.debug(
        f"Configuration loaded: scan {config.ingest.header_scan_rows} rows, "
        f"timezone {config.dates.timezone}, {config.batch.max_workers} workers"
    )
    return config


__all__ = [
    "AppConfig",
    "IngestConfig",
    "DatesConfig",
    "BatchConfig",
    "AnalysisConfig",
    "StorageConfig",
    "ReportConfig",
    "LoggingConfig",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]
