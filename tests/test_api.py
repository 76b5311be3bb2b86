"""Tests for the UI-facing request/response surface."""

from unittest.mock import patch

import pytest

from passcryption.api import PasscryptionAPI
from passcryption.clipboard import ClipboardClearScheduler
from passcryption.errors import KeyDerivationError


@pytest.fixture
def api(store, settings, clipboard, manual_timer):
    scheduler = ClipboardClearScheduler(clipboard, timer=manual_timer)
    return PasscryptionAPI(store, settings, clipboard, scheduler)


def test_save_get_update_delete(api):
    assert api.get_passwords() == []
    assert api.save_password({"site": "a.com", "username": "u", "password": "p"}) is True

    [entry] = api.get_passwords()
    assert entry["site"] == "a.com"
    assert entry["createdAt"]
    assert "updatedAt" not in entry

    assert api.update_password({"id": entry["id"], "password": "q"}) is True
    [updated] = api.get_passwords()
    assert updated["password"] == "q"
    assert updated["username"] == "u"
    assert updated["updatedAt"]

    assert api.delete_password(entry["id"]) is True
    assert api.get_passwords() == []


def test_invalid_entry_is_reported_as_false(api):
    assert api.save_password({"site": "a.com"}) is False
    assert api.get_passwords() == []


def test_update_without_id_or_unknown_id(api):
    assert api.update_password({"password": "q"}) is False
    assert api.update_password({"id": "missing", "password": "q"}) is False


def test_update_to_blank_password_is_rejected(api):
    api.save_password({"site": "a.com", "password": "p"})
    entry_id = api.get_passwords()[0]["id"]
    assert api.update_password({"id": entry_id, "password": ""}) is False


def test_save_failure_is_reported_as_false(api, store):
    with patch.object(store.backend, "write_text", side_effect=OSError("read-only")):
        assert api.save_password({"site": "a.com", "password": "p"}) is False


def test_key_failure_does_not_raise(api, store):
    with patch.object(store.key_provider, "get_key", side_effect=KeyDerivationError("no user")):
        store.backend.write_text("anything")
        assert api.get_passwords() == []
        assert api.delete_password("x") is False


def test_search(api):
    api.save_password({"site": "github.com", "password": "p"})
    api.save_password({"site": "bank", "email": "me@mail.org", "password": "p"})
    assert [e["site"] for e in api.search_passwords("MAIL")] == ["bank"]


def test_generate_password(api):
    password = api.generate_password({"length": 20, "includeSymbols": False})
    assert len(password) == 20
    assert password.isalnum()


def test_generate_password_defaults(api):
    assert len(api.generate_password()) == 16


def test_generate_password_invalid_length(api):
    assert api.generate_password({"length": 0}) == ""


def test_copy_uses_clear_time_setting(api, settings, clipboard, manual_timer):
    settings.save({"clipboardClearTime": 15})
    assert api.copy_to_clipboard("secret") is True
    assert clipboard.read_text() == "secret"
    assert manual_timer.pending[0][0] == 15.0

    manual_timer.fire_all()
    assert clipboard.read_text() == ""


def test_copy_with_never_clear(api, settings, clipboard, manual_timer):
    settings.save({"clipboardClearTime": 0})
    api.copy_to_clipboard("secret")
    assert manual_timer.pending == []
    assert clipboard.read_text() == "secret"


def test_copy_failure_returns_false(api, clipboard):
    with patch.object(clipboard, "write_text", side_effect=RuntimeError("no display")):
        assert api.copy_to_clipboard("secret") is False


def test_settings_round_trip(api):
    assert api.get_settings()["theme"] == "dark"
    assert api.save_settings({"theme": "light", "clipboardClearTime": 60}) is True
    assert api.get_settings() == {"theme": "light", "clipboardClearTime": 60}


@pytest.mark.parametrize("payload", [None, ["x"], "a.com", 42])
def test_non_dict_payloads_are_rejected(api, payload):
    assert api.save_password(payload) is False
    assert api.update_password(payload) is False
    assert api.get_passwords() == []
