"""Tests for the settings document."""

import json

from passcryption import config


def test_defaults_when_missing(settings):
    assert settings.load() == config.DEFAULT_SETTINGS


def test_save_and_load(settings):
    assert settings.save({"theme": "light", "clipboardClearTime": 0}) is True
    assert settings.load() == {"theme": "light", "clipboardClearTime": 0}


def test_unknown_keys_are_kept(settings):
    settings.save({"theme": "system", "clipboardClearTime": 10, "fontSize": 14})
    assert settings.load()["fontSize"] == 14


def test_invalid_values_fall_back(settings):
    with open(settings.filepath, "w") as f:
        json.dump({"theme": "neon", "clipboardClearTime": "soon"}, f)
    assert settings.load() == config.DEFAULT_SETTINGS


def test_negative_clear_time_means_never(settings):
    settings.save({"clipboardClearTime": -3})
    assert settings.load()["clipboardClearTime"] == 0


def test_corrupt_file_gives_defaults(settings):
    with open(settings.filepath, "w") as f:
        f.write("{not json")
    assert settings.load() == config.DEFAULT_SETTINGS


def test_non_object_file_gives_defaults(settings):
    with open(settings.filepath, "w") as f:
        json.dump([1, 2], f)
    assert settings.load() == config.DEFAULT_SETTINGS


def test_get(settings):
    settings.save({"clipboardClearTime": 45})
    assert settings.get("clipboardClearTime") == 45
    assert settings.get("missing", "x") == "x"
