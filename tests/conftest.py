"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import pytest

from engine import ManualScheduler, SearchEngine
from graph import GraphStore
from main import create_app


@pytest.fixture
def graph() -> GraphStore:
    """Return an empty graph."""
    return GraphStore()


@pytest.fixture
def triangle() -> GraphStore:
    """A→B(1), A→C(4), B→C(1), inserted in that order."""
    g = GraphStore()
    g.add_edge("A", "B", 1)
    g.add_edge("A", "C", 4)
    g.add_edge("B", "C", 1)
    return g


@pytest.fixture
def engine(triangle: GraphStore) -> SearchEngine:
    return SearchEngine(triangle)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def app(scheduler: ManualScheduler):
    return create_app({
        "TESTING":       True,
        "SECRET_KEY":    "test",
        "SCHEDULER":     scheduler,
        "TICK_INTERVAL": 1.0,
        "LAYOUT_SEED":   7,
    })


@pytest.fixture
def client(app):
    return app.test_client()
