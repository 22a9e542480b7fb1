"""Shared fixtures for the pydeduce test suite."""

import pytest

from pydeduce import (
    BoundVariable,
    EngineState,
    FreeVariable,
    MemoryStore,
    Predicate,
    atomic,
    build_catalog,
)


@pytest.fixture
def state():
    """An engine state with no store."""
    return EngineState()


@pytest.fixture
def catalog(state):
    """The built-in catalog, defined in ``state`` with nothing unlocked."""
    return build_catalog(state)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def stored_state(store):
    """An engine state remembering progress in an in-memory store."""
    return EngineState(store=store)


@pytest.fixture
def rain():
    return atomic("Rain")


@pytest.fixture
def wet():
    return atomic("Wet")


@pytest.fixture
def cloudy():
    return atomic("Cloudy")


@pytest.fixture
def x():
    return FreeVariable("x")


@pytest.fixture
def y():
    return FreeVariable("y")


@pytest.fixture
def big_x():
    return BoundVariable("X")


@pytest.fixture
def big_y():
    return BoundVariable("Y")


@pytest.fixture
def p():
    """A unary predicate."""
    return Predicate("P", 1)


@pytest.fixture
def q():
    """A binary predicate."""
    return Predicate("Q", 2)
