"""Tests for the autoredact command-line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from conftest import EMAIL_RESULT, FakeRecognizer
from PIL import Image

from autoredact import factory
from autoredact.cli import main
from autoredact.errors import RecognitionError
from autoredact.settings_store import SETTINGS_FILENAME, STORAGE_KEY


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def env(tmp_path):
    return {"AUTOREDACT_STORAGE_DIR": str(tmp_path / "store"), "AUTOREDACT_LOG_LEVEL": "WARNING"}


def _stored(env) -> dict:
    path = f"{env['AUTOREDACT_STORAGE_DIR']}/{SETTINGS_FILENAME}"
    with open(path, encoding="utf-8") as f:
        return json.load(f)[STORAGE_KEY]


def _fake_build_batch(*results):
    def _build(settings, on_item=None, on_progress=None):
        return factory.build_batch(
            settings, recognizer=FakeRecognizer(*results), on_item=on_item, on_progress=on_progress
        )

    return _build


class TestSettingsCommands:
    def test_show_defaults(self, runner, env):
        result = runner.invoke(main, ["settings", "show"], env=env)
        assert result.exit_code == 0
        assert json.loads(result.stdout)["email"] is True

    def test_add_date(self, runner, env):
        result = runner.invoke(main, ["settings", "add-date", "January 5, 2024"], env=env)
        assert result.exit_code == 0
        assert "2024-01-05" in result.output
        assert _stored(env)["custom_dates"] == ["January 5, 2024"]

    def test_add_invalid_date(self, runner, env):
        result = runner.invoke(main, ["settings", "add-date", "2024-02-30"], env=env)
        assert result.exit_code == 2
        assert "Unrecognized date" in result.output

    def test_add_regex(self, runner, env):
        result = runner.invoke(
            main, ["settings", "add-regex", r"EMP-\d+", "--label", "employee"], env=env
        )
        assert result.exit_code == 0
        rule = _stored(env)["custom_regex"][0]
        assert rule["pattern"] == r"EMP-\d+"
        assert rule["label"] == "employee"

    def test_add_invalid_regex(self, runner, env):
        result = runner.invoke(main, ["settings", "add-regex", "[unclosed"], env=env)
        assert result.exit_code == 2
        assert "Invalid regex" in result.output

    def test_block_word_and_allow(self, runner, env):
        runner.invoke(main, ["settings", "add-block-word", "falcon"], env=env)
        runner.invoke(main, ["settings", "add-block-word", "falcon"], env=env)
        runner.invoke(main, ["settings", "allow", "a@b.com"], env=env)
        stored = _stored(env)
        assert stored["block_words"] == ["falcon"]
        assert "a@b.com" in stored["allowlist"]

    def test_block_word_case_duplicate_not_stored(self, runner, env):
        runner.invoke(main, ["settings", "add-block-word", "Falcon"], env=env)
        runner.invoke(main, ["settings", "add-block-word", "falcon"], env=env)
        assert _stored(env)["block_words"] == ["Falcon"]

    def test_reset(self, runner, env):
        runner.invoke(main, ["settings", "add-block-word", "falcon"], env=env)
        result = runner.invoke(main, ["settings", "reset"], env=env)
        assert result.exit_code == 0
        assert _stored(env)["block_words"] == []


class TestRedactCommand:
    def test_writes_redacted_png(self, runner, env, png_factory, tmp_path):
        out_dir = tmp_path / "out"
        with patch("autoredact.cli.build_batch", side_effect=_fake_build_batch(EMAIL_RESULT)):
            result = runner.invoke(
                main, ["redact", png_factory("scan.png"), "-o", str(out_dir)], env=env
            )
        assert result.exit_code == 0, result.output
        assert "emails=1" in result.output
        with Image.open(out_dir / "redacted-scan.png") as img:
            assert img.size == (50, 20)

    def test_failed_item_exit_code(self, runner, env, png_factory, tmp_path):
        with patch(
            "autoredact.cli.build_batch",
            side_effect=_fake_build_batch(RecognitionError("engine crashed")),
        ):
            result = runner.invoke(
                main, ["redact", png_factory(), "-o", str(tmp_path / "out")], env=env
            )
        assert result.exit_code == 2
        assert "engine crashed" in result.output

    def test_nothing_to_process(self, runner, env, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hello")
        result = runner.invoke(main, ["redact", str(notes), "-o", str(tmp_path / "out")], env=env)
        assert result.exit_code == 1
        assert "Unsupported file type" in result.output

    def test_bad_override_rejected(self, runner, env, png_factory, tmp_path):
        result = runner.invoke(
            main,
            ["redact", png_factory(), "-o", str(tmp_path / "out"), "--date", "not a date"],
            env=env,
        )
        assert result.exit_code == 2
