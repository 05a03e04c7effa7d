"""Unit tests for DetectionSettingsStore and the stored settings schema."""

import json

from autoredact.models.entities import CustomRegex, DetectionConfig
from autoredact.patterns import DEFAULT_ALLOWLIST
from autoredact.rules.dates import build_date_rule
from autoredact.schemas import StoredDetectionSettings, StoredRegexRule
from autoredact.settings_store import (
    SETTINGS_FILENAME,
    STORAGE_KEY,
    DetectionSettingsStore,
    merge_over_defaults,
)


def _write(tmp_path, document) -> None:
    (tmp_path / SETTINGS_FILENAME).write_text(json.dumps(document), encoding="utf-8")


class TestLoad:
    def test_defaults_when_missing(self, tmp_path):
        settings = DetectionSettingsStore(tmp_path).load()
        assert settings == StoredDetectionSettings()
        assert settings.allowlist == DEFAULT_ALLOWLIST

    def test_partial_document_merged_over_defaults(self, tmp_path):
        _write(tmp_path, {STORAGE_KEY: {"email": False, "block_words": ["falcon"]}})
        settings = DetectionSettingsStore(tmp_path).load()
        assert settings.email is False
        assert settings.ip is True
        assert settings.block_words == ["falcon"]
        assert settings.allowlist == DEFAULT_ALLOWLIST

    def test_invalid_field_only_loses_itself(self, tmp_path):
        _write(tmp_path, {STORAGE_KEY: {"email": "not-a-bool", "ip": False}})
        settings = DetectionSettingsStore(tmp_path).load()
        assert settings.email is True
        assert settings.ip is False

    def test_unknown_keys_ignored(self, tmp_path):
        _write(tmp_path, {STORAGE_KEY: {"colour": "red", "pii": False}})
        assert DetectionSettingsStore(tmp_path).load().pii is False

    def test_corrupt_file_gives_defaults(self, tmp_path):
        (tmp_path / SETTINGS_FILENAME).write_text("{not json", encoding="utf-8")
        assert DetectionSettingsStore(tmp_path).load() == StoredDetectionSettings()

    def test_non_object_value_gives_defaults(self, tmp_path):
        _write(tmp_path, {STORAGE_KEY: ["email"]})
        assert DetectionSettingsStore(tmp_path).load() == StoredDetectionSettings()


class TestSave:
    def test_round_trip_recompiles_rules(self, tmp_path):
        store = DetectionSettingsStore(tmp_path)
        config = DetectionConfig(
            secret=False,
            allowlist=frozenset({"10.0.0.1"}),
            block_words=frozenset({"falcon"}),
            custom_dates=(build_date_rule("2024-01-05"),),
            custom_regex=(CustomRegex(r"EMP-\d+", case_sensitive=True, label="employee"),),
        )
        store.save(StoredDetectionSettings.from_detection_config(config))
        loaded = store.load_config()

        assert loaded.secret is False
        assert loaded.allowlist == frozenset({"10.0.0.1"})
        assert loaded.block_words == frozenset({"falcon"})
        assert loaded.custom_dates[0].original_input == "2024-01-05"
        assert len(loaded.custom_dates[0].compiled_patterns) == 16
        assert loaded.custom_regex == config.custom_regex

    def test_other_keys_preserved(self, tmp_path):
        _write(tmp_path, {"theme": "dark"})
        DetectionSettingsStore(tmp_path).save(StoredDetectionSettings(email=False))
        document = json.loads((tmp_path / SETTINGS_FILENAME).read_text(encoding="utf-8"))
        assert document["theme"] == "dark"
        assert document[STORAGE_KEY]["email"] is False

    def test_creates_directory(self, tmp_path):
        store = DetectionSettingsStore(tmp_path / "nested" / "dir")
        store.save(StoredDetectionSettings())
        assert store.path.exists()

    def test_reset(self, tmp_path):
        store = DetectionSettingsStore(tmp_path)
        store.save(StoredDetectionSettings(email=False, block_words=["falcon"]))
        assert store.reset() == StoredDetectionSettings()
        assert store.load() == StoredDetectionSettings()


class TestStoredDetectionSettings:
    def test_invalid_stored_date_dropped(self):
        settings = StoredDetectionSettings(custom_dates=["2024-02-30", "2024-01-05"])
        config = settings.to_detection_config()
        assert [d.original_input for d in config.custom_dates] == ["2024-01-05"]

    def test_blank_block_words_dropped(self):
        config = StoredDetectionSettings(block_words=[" falcon ", "  "]).to_detection_config()
        assert config.block_words == frozenset({"falcon"})

    def test_regex_rule_keeps_id(self):
        settings = StoredDetectionSettings(
            custom_regex=[StoredRegexRule(id="abc123", pattern="x+")]
        )
        assert settings.to_detection_config().custom_regex[0].id == "abc123"

    def test_merge_over_defaults_empty(self):
        assert merge_over_defaults({}) == StoredDetectionSettings()
