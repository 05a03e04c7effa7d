"""Persistence of detection settings as a JSON document."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .config import get_settings
from .models.entities import DetectionConfig
from .schemas import StoredDetectionSettings

logger = logging.getLogger(__name__)

STORAGE_KEY = "autoredact_detection_settings"
SETTINGS_FILENAME = "settings.json"


def merge_over_defaults(stored: dict) -> StoredDetectionSettings:
    """Apply stored values over defaults one field at a time.

    Unknown keys are ignored and an invalid value only loses its own field,
    so settings written by older versions keep working.
    """
    merged = StoredDetectionSettings().model_dump()
    for key, value in stored.items():
        if key not in StoredDetectionSettings.model_fields:
            continue
        try:
            StoredDetectionSettings.model_validate({**merged, key: value})
        except PydanticValidationError:
            logger.warning("Ignoring invalid stored setting %r", key)
            continue
        merged[key] = value
    return StoredDetectionSettings.model_validate(merged)


class DetectionSettingsStore:
    """Stores one settings object under a fixed key in a JSON file."""

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            base_dir: Directory holding the settings file. Uses settings if
                not provided.
        """
        self._base_dir = base_dir

    @property
    def base_dir(self) -> Path:
        if self._base_dir is None:
            self._base_dir = Path(get_settings().storage_dir)
        return self._base_dir

    @property
    def path(self) -> Path:
        return self.base_dir / SETTINGS_FILENAME

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, using defaults: %s", self.path, e)
            return {}
        return document if isinstance(document, dict) else {}

    def load(self) -> StoredDetectionSettings:
        stored = self._read_document().get(STORAGE_KEY)
        if not isinstance(stored, dict):
            return StoredDetectionSettings()
        return merge_over_defaults(stored)

    def load_config(self) -> DetectionConfig:
        return self.load().to_detection_config()

    def save(self, settings: StoredDetectionSettings) -> None:
        document = self._read_document()
        document[STORAGE_KEY] = settings.model_dump(mode="json")
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        logger.info("Saved detection settings to %s", self.path)

    def reset(self) -> StoredDetectionSettings:
        defaults = StoredDetectionSettings()
        self.save(defaults)
        return defaults
