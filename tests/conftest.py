"""
Pytest configuration for the juice tracker.

Provides fixtures for:
- A JSON juice store in a temporary directory
- A recording fake store for entry-form tests
- An API test client wired to the temporary store
"""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from juicetracker.api.app import app
from juicetracker.api.state import AppState, get_state
from juicetracker.core.juice_store import JuiceStore
from juicetracker.models.juice import Juice, JuiceColor


class FakeStore:
    """In-memory store that records persist calls.

    With ``deferred=True`` fetch_by_id returns an unresolved Future per call,
    so tests decide when (and with what) a load completes.
    """

    def __init__(self, juices: Optional[List[Juice]] = None, deferred: bool = False) -> None:
        self.juices: Dict[int, Juice] = {j.id: j for j in juices or []}
        self.deferred = deferred
        self.fetches: List[int] = []
        self.pending: List[Future] = []
        self.persisted: List[Juice] = []

    def fetch_by_id(self, juice_id: int):
        self.fetches.append(juice_id)
        if not self.deferred:
            return self.juices.get(juice_id)
        future: Future = Future()
        self.pending.append(future)
        return future

    def resolve(self, index: int = -1) -> None:
        """Complete a pending fetch with whatever the store holds for that id."""
        future = self.pending[index]
        juice_id = self.fetches[index]
        future.set_result(self.juices.get(juice_id))

    def persist(self, juice: Juice) -> None:
        self.persisted.append(juice)


@pytest.fixture
def pear() -> Juice:
    return Juice(42, "Pear", "d", JuiceColor.Green, 3)


@pytest.fixture
def fake_store(pear: Juice) -> FakeStore:
    return FakeStore([pear])


@pytest.fixture
def deferred_store(pear: Juice) -> FakeStore:
    return FakeStore([pear], deferred=True)


@pytest.fixture
def juice_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "juices.json"


@pytest.fixture
def store(juice_path: Path) -> JuiceStore:
    return JuiceStore(juice_path)


@pytest.fixture
def app_state(store: JuiceStore) -> AppState:
    # Loads resolve synchronously so responses are deterministic
    return AppState(store=store, background_load=False)


@pytest.fixture
def client(app_state: AppState):
    app.dependency_overrides[get_state] = lambda: app_state
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
