# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Euclidean ambient state space."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from constrained_motion.planning.spec import SpaceType

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

    from constrained_motion.planning.space_information import SpaceInformation
    from constrained_motion.planning.spec import State


class RealVectorStateSpace:
    """R^n with the Euclidean metric, linear interpolation and optional bounds.

    States are 1-D float64 numpy arrays. Every method that returns a state
    returns a fresh array; inputs are never modified unless the method says so.
    """

    def __init__(
        self,
        dimension: int,
        lower_bounds: ArrayLike | None = None,
        upper_bounds: ArrayLike | None = None,
        longest_valid_segment: float = 0.05,
    ):
        if dimension <= 0:
            raise ValueError(f"Dimension must be positive, got {dimension}")
        if longest_valid_segment <= 0.0:
            raise ValueError(
                f"Longest valid segment must be positive, got {longest_valid_segment}"
            )

        self._dimension = dimension
        self._lower = (
            np.full(dimension, -np.inf) if lower_bounds is None else self._as_state(lower_bounds)
        )
        self._upper = (
            np.full(dimension, np.inf) if upper_bounds is None else self._as_state(upper_bounds)
        )
        if np.any(self._lower > self._upper):
            raise ValueError("Lower bounds must not exceed upper bounds")
        self._longest_valid_segment = float(longest_valid_segment)

    @property
    def space_type(self) -> SpaceType:
        return SpaceType.REAL_VECTOR

    @property
    def longest_valid_segment(self) -> float:
        return self._longest_valid_segment

    def get_dimension(self) -> int:
        return self._dimension

    def get_bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Get (lower, upper) bounds; unbounded axes are +-inf."""
        return self._lower.copy(), self._upper.copy()

    def setup(self, si: SpaceInformation) -> None:
        """Hook called when a SpaceInformation binds this space."""

    # State management

    def alloc_state(self) -> State:
        return np.zeros(self._dimension, dtype=np.float64)

    def clone_state(self, state: State) -> State:
        return self._as_state(state).copy()

    def copy_state(self, destination: State, source: State) -> None:
        destination[:] = self._as_state(source)

    # Metric and interpolation

    def distance(self, state1: State, state2: State) -> float:
        return float(np.linalg.norm(self._as_state(state1) - self._as_state(state2)))

    def interpolate(self, start: State, goal: State, t: float) -> State:
        """Point start + t * (goal - start) on the straight ambient segment."""
        start = self._as_state(start)
        return start + t * (self._as_state(goal) - start)

    def valid_segment_count(self, state1: State, state2: State) -> int:
        """Number of segments of at most longest_valid_segment between two states."""
        return int(math.ceil(self.distance(state1, state2) / self._longest_valid_segment))

    # Bounds

    def satisfies_bounds(self, state: State) -> bool:
        state = self._as_state(state)
        return bool(np.all(state >= self._lower) and np.all(state <= self._upper))

    def enforce_bounds(self, state: State) -> None:
        np.clip(state, self._lower, self._upper, out=state)

    def _as_state(self, state: ArrayLike) -> NDArray[np.float64]:
        state = np.asarray(state, dtype=np.float64)
        if state.shape != (self._dimension,):
            raise ValueError(f"Expected a state of shape ({self._dimension},), got {state.shape}")
        return state
