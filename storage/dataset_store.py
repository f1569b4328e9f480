"""Local JSON key/value store for parsed datasets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from contracts import Dataset
from contracts.versioning import make_envelope, open_envelope
from exceptions import StorageError
from log_config.logger import get_logger

logger = get_logger(__name__)

STORAGE_KEY = "baseline-player-data"


class DatasetStore:
    """Persist the parsed dataset (never the raw CSVs) under one key."""

    def __init__(self, path: Union[str, Path], key: str = STORAGE_KEY):
        """Initialize store.

        Args:
            path: JSON file holding the key/value map
            key: Key the dataset is stored under
        """
        self.path = Path(path)
        self.key = key

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            return open_envelope(json.loads(self.path.read_text(encoding="utf-8")))
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Failed to load saved data from {self.path}: {e}")
            self.path.unlink(missing_ok=True)
            return {}

    def _write_all(self, payload: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(make_envelope(payload), indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save data to {self.path}: {e}")
            raise StorageError(f"Could not write {self.path}: {e}") from e

    def load(self) -> Optional[Dataset]:
        """Stored dataset, or None when missing, empty, or unreadable."""
        stored = self._read_all().get(self.key)
        if not stored:
            return None
        try:
            dataset = Dataset.from_dict(stored)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Saved data under {self.key!r} is invalid: {e}")
            self.clear()
            return None
        if dataset.is_empty:
            return None
        logger.debug(f"Loaded {len(dataset.files())} file(s) from {self.path}")
        return dataset

    def save(self, dataset: Dataset) -> None:
        payload = self._read_all()
        payload[self.key] = dataset.to_dict()
        self._write_all(payload)
        logger.info(f"Saved {len(dataset.files())} file(s) to {self.path}")

    def clear(self) -> None:
        """Remove the dataset key, leaving other keys untouched."""
        payload = self._read_all()
        if self.key in payload:
            del payload[self.key]
            self._write_all(payload)


__all__ = ["STORAGE_KEY", "DatasetStore"]
