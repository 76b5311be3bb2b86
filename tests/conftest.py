"""Shared fixtures for the vault core tests."""

import os

import pytest

from passcryption.clipboard import Clipboard
from passcryption.keys import StaticKeyProvider
from passcryption.settings import SettingsManager
from passcryption.storage import StorageManager, VaultFile

TEST_KEY = bytes(range(32))


class FakeClipboard(Clipboard):
    """In-memory clipboard."""

    def __init__(self, text: str = ""):
        self.text = text
        self.clear_calls = 0

    def read_text(self) -> str:
        return self.text

    def write_text(self, text: str) -> None:
        self.text = text

    def clear(self) -> None:
        self.text = ""
        self.clear_calls += 1


class ManualTimer:
    """Timer factory that records callbacks until the test fires them."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay_seconds, callback):
        self.pending.append((delay_seconds, callback))

    def fire_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.fixture
def vault_path(tmp_path):
    return os.path.join(str(tmp_path), "passwords.enc")


@pytest.fixture
def store(vault_path):
    return StorageManager(VaultFile(vault_path), key_provider=StaticKeyProvider(TEST_KEY))


@pytest.fixture
def settings(tmp_path):
    return SettingsManager(os.path.join(str(tmp_path), "settings.json"))


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def manual_timer():
    return ManualTimer()
