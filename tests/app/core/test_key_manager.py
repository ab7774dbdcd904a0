"""Tests for master key loading."""

import base64
import logging
import os

import pytest

from app.core.errors import KeyUnavailableError
from app.core.key_manager import KeyHandle, KeyManager, load_master_key


def test_load_valid_key():
    raw = os.urandom(32)
    handle = load_master_key(base64.b64encode(raw).decode())
    assert handle is not None
    assert handle.key == raw


def test_load_strips_surrounding_whitespace():
    raw = os.urandom(32)
    handle = load_master_key(f"  {base64.b64encode(raw).decode()}\n")
    assert handle is not None
    assert handle.key == raw


@pytest.mark.parametrize(
    "encoded",
    [
        None,
        "",
        "   ",
        "not base64!!",
        base64.b64encode(os.urandom(16)).decode(),
        base64.b64encode(os.urandom(31)).decode(),
        base64.b64encode(os.urandom(33)).decode(),
    ],
)
def test_invalid_keys_are_unavailable(encoded):
    assert load_master_key(encoded) is None


def test_key_material_is_never_logged(caplog):
    raw = os.urandom(31)
    encoded = base64.b64encode(raw).decode()
    with caplog.at_level(logging.DEBUG):
        assert load_master_key(encoded) is None
    assert encoded not in caplog.text
    assert caplog.records


def test_handle_repr_hides_key():
    handle = KeyHandle(key=b"k" * 32)
    assert "kkkk" not in repr(handle)


def test_handle_is_immutable():
    handle = KeyHandle(key=b"k" * 32)
    with pytest.raises(AttributeError):
        handle.key = b"x" * 32


def test_manager_available():
    handle = KeyHandle(key=os.urandom(32))
    manager = KeyManager(handle)
    assert manager.available is True
    assert manager.require() is handle


def test_manager_unavailable_raises_every_time():
    manager = KeyManager(None)
    assert manager.available is False
    for _ in range(3):
        with pytest.raises(KeyUnavailableError):
            manager.require()


def test_from_settings(monkeypatch):
    from app.config import get_settings

    raw = os.urandom(32)
    monkeypatch.setenv("API_KEY_ENCRYPTION_KEY_B64", base64.b64encode(raw).decode())
    manager = KeyManager.from_settings(get_settings())
    assert manager.require().key == raw

    monkeypatch.delenv("API_KEY_ENCRYPTION_KEY_B64")
    assert KeyManager.from_settings(get_settings()).available is False
