"""Shared pytest fixtures for pathgen tests.

Provides a scripted random source for exact-sequence tests and factories for
options and worlds.

GRID CONVENTION:
    Coordinates are (row, col) with row 0 at the top. UP decreases the row,
    RIGHT increases the column.
"""

from typing import Callable, List, Optional

import pytest

from pathgen.domain.types import PathFindingOptions
from pathgen.domain.world import World


# =============================================================================
# RANDOM SOURCES
# =============================================================================


class ScriptedRNG:
    """Random source that picks from a fixed list of indices.

    Each choice() call consumes the next index (modulo the sequence length);
    once the script runs out it always picks the first element.
    """

    def __init__(self, indices: Optional[List[int]] = None) -> None:
        self.indices = list(indices or [])
        self.calls: List[list] = []

    def choice(self, seq):
        self.calls.append(list(seq))
        index = self.indices.pop(0) if self.indices else 0
        return seq[index % len(seq)]


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRNG]:
    """Factory for ScriptedRNG instances."""
    def _make(*indices: int) -> ScriptedRNG:
        return ScriptedRNG(list(indices))
    return _make


# =============================================================================
# OPTIONS AND WORLDS
# =============================================================================


@pytest.fixture
def make_options() -> Callable[..., PathFindingOptions]:
    """Factory for PathFindingOptions with a 5x5 grid ending on the top row."""
    def _make(**overrides) -> PathFindingOptions:
        values = dict(
            num_rows=5,
            num_cols=5,
            starting_row=4,
            starting_col=2,
            ending_row=0,
        )
        values.update(overrides)
        return PathFindingOptions(**values)
    return _make


@pytest.fixture
def world() -> World:
    """Empty 3x3 world that forbids intersection and shares the start cell."""
    return World(3, 3)


@pytest.fixture
def open_world() -> World:
    """Empty 3x3 world that allows intersection."""
    return World(3, 3, allow_intersection=True)
