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

"""
Path Utilities

Standalone utility functions for discretized on-manifold paths.

## Functions

- compute_path_length(): Total ambient length of a path
- state_at_fraction(): State at a fraction of the cumulative path length
- max_constraint_violation(): Largest residual norm along a path
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from constrained_motion.planning.spec import ConstraintSpec, StatePath


def compute_path_length(path: StatePath) -> float:
    """Sum of Euclidean distances between consecutive states."""
    if len(path) < 2:
        return 0.0
    points = np.asarray(path, dtype=np.float64)
    return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))


def state_at_fraction(path: StatePath, t: float) -> NDArray[np.float64]:
    """Return the state at fraction ``t`` of the cumulative length of ``path``.

    The result is a fresh array. ``t`` is clipped to [0, 1]; the result is the
    first waypoint whose cumulative length reaches ``t`` times the total, which
    keeps it on the manifold instead of blending two waypoints linearly.

    Example:
        result = space.discrete_geodesic(a, b, interpolate=True)
        midpoint = state_at_fraction(result.path, 0.5)
    """
    if len(path) == 0:
        raise ValueError("Cannot pick a state from an empty path")

    t = min(max(t, 0.0), 1.0)
    if len(path) == 1 or t == 0.0:
        return np.array(path[0], dtype=np.float64)
    if t == 1.0:
        return np.array(path[-1], dtype=np.float64)

    points = np.asarray(path, dtype=np.float64)
    cumulative = np.concatenate(([0.0], np.cumsum(np.linalg.norm(np.diff(points, axis=0), axis=1))))
    target = t * cumulative[-1]
    index = int(np.searchsorted(cumulative, target, side="left"))
    return points[min(index, len(points) - 1)].copy()


def max_constraint_violation(constraint: ConstraintSpec, path: StatePath) -> float:
    """Largest residual norm over the states of a path (0.0 for an empty path)."""
    return max((constraint.distance(state) for state in path), default=0.0)
