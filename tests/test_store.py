"""Tests for the record store lifecycle."""
from __future__ import annotations

from datetime import datetime

import pytest

from workhours.db import RecordStore
from workhours.exceptions import StorageUnavailableError
from workhours.repositories import UserRepository


def test_session_before_connect_is_unavailable() -> None:
    store = RecordStore("sqlite://")
    with pytest.raises(StorageUnavailableError):
        with store.session_scope():
            pass


def test_unreachable_store_fails_to_connect(tmp_path) -> None:
    store = RecordStore(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'hours.db'}")
    with pytest.raises(StorageUnavailableError):
        store.connect()
    assert not store.is_connected


def test_connect_and_close_are_idempotent(tmp_path) -> None:
    store = RecordStore(f"sqlite:///{tmp_path / 'hours.db'}")
    store.connect()
    store.connect()
    assert store.is_connected

    store.close()
    store.close()
    assert not store.is_connected


def test_session_scope_rolls_back_on_error() -> None:
    store = RecordStore("sqlite://")
    store.connect()

    with pytest.raises(RuntimeError):
        with store.session_scope() as session:
            UserRepository(session).insert_one(
                username="alice",
                email="a@x.com",
                password_hash="x",
                created_at=datetime(2024, 5, 1),
            )
            raise RuntimeError("boom")

    with store.session_scope() as session:
        assert UserRepository(session).find_many() == []
