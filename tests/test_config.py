from pathlib import Path

import pytest

from configs.settings import DEFAULT_CONFIG_PATH, load_config
from exceptions import ConfigValidationError, InvalidConfigError, SwingTrendsError
from ingest.diagnostics import ParserOptions


def test_load_config() -> None:
    config = load_config(Path("configs/default.yaml"))

    assert config.ingest.header_scan_rows == 15
    assert config.dates.timezone == "UTC"
    assert config.analysis.max_comparison_players == 3
    assert config.storage.key == "baseline-player-data"


def test_default_path() -> None:
    assert load_config() == load_config(DEFAULT_CONFIG_PATH)


def test_partial_file_gets_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("dates:\n  timezone: America/Chicago\n")

    config = load_config(path)

    assert config.dates.timezone == "America/Chicago"
    assert config.dates.dayfirst is False
    assert config.batch.max_workers == 4
    assert config.logging.log_dir is None


def test_empty_file_gets_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")

    assert load_config(path).report.dpi == 100


def test_parser_options_from_config(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("ingest:\n  strict: true\n  header_scan_rows: 30\n")

    options = ParserOptions.from_config(load_config(path))

    assert options.strict is True
    assert options.header_scan_rows == 30
    assert options.timezone == "UTC"


def test_invalid_value_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("batch:\n  max_workers: 0\n")

    with pytest.raises(ConfigValidationError) as exc_info:
        load_config(path)
    assert any("max_workers" in msg for msg in exc_info.value.validation_errors)


def test_malformed_yaml(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("ingest: [unclosed\n")

    with pytest.raises(InvalidConfigError):
        load_config(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        load_config(tmp_path / "nope.yaml")


def test_unknown_timezone_rejected_at_load(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("dates:\n  timezone: Mars/Base\n")

    with pytest.raises(InvalidConfigError) as exc_info:
        load_config(path)
    assert "Mars/Base" in str(exc_info.value)


def test_parser_options_reject_unknown_timezone() -> None:
    with pytest.raises(SwingTrendsError):
        ParserOptions(timezone="Mars/Base")
    assert ParserOptions(timezone="America/Chicago").tz() is not None
