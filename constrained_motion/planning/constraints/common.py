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

"""Ready-made constraints."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np

from constrained_motion.planning.constraints.constraint import Constraint

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

    from constrained_motion.planning.spec import Jacobian, Residual, State


class SphereConstraint(Constraint):
    """Sphere of a given radius around a center: F(x) = ||x - c|| - r."""

    def __init__(
        self,
        ambient_dim: int = 3,
        radius: float = 1.0,
        center: ArrayLike | None = None,
        tolerance: float | None = None,
        max_iterations: int | None = None,
    ):
        super().__init__(ambient_dim, 1, tolerance=tolerance, max_iterations=max_iterations)
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self._radius = float(radius)
        self._center = (
            np.zeros(ambient_dim)
            if center is None
            else self._check_state(np.array(center, dtype=np.float64))
        )

    @property
    def radius(self) -> float:
        return self._radius

    def function(self, x: State) -> Residual:
        return np.array([np.linalg.norm(np.asarray(x) - self._center) - self._radius])

    def jacobian(self, x: State) -> Jacobian:
        offset = self._check_state(x) - self._center
        # Undefined at the center; a zero row makes the least-squares step a no-op there
        norm = np.linalg.norm(offset)
        if norm == 0.0:
            return np.zeros((1, self._n))
        return (offset / norm)[np.newaxis, :]


class FunctionConstraint(Constraint):
    """Constraint built from plain callables.

    Example:
        circle = FunctionConstraint(
            ambient_dim=2,
            co_dim=1,
            function=lambda x: np.array([x @ x - 1.0]),
            jacobian=lambda x: 2.0 * x[np.newaxis, :],
        )
    """

    def __init__(
        self,
        ambient_dim: int,
        co_dim: int,
        function: Callable[[NDArray[np.float64]], ArrayLike],
        jacobian: Callable[[NDArray[np.float64]], ArrayLike] | None = None,
        tolerance: float | None = None,
        max_iterations: int | None = None,
    ):
        super().__init__(ambient_dim, co_dim, tolerance=tolerance, max_iterations=max_iterations)
        self._function = function
        self._jacobian = jacobian

    def function(self, x: State) -> Residual:
        return np.reshape(
            np.asarray(self._function(x), dtype=np.float64), (self.get_co_dimension(),)
        )

    def jacobian(self, x: State) -> Jacobian:
        if self._jacobian is None:
            return super().jacobian(x)
        return np.reshape(
            np.asarray(self._jacobian(self._check_state(x)), dtype=np.float64),
            (self.get_co_dimension(), self._n),
        )
