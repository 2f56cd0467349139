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

"""Implicit manifold constraints.

A constraint of co-dimension m in an ambient space R^n defines the manifold
{x : F(x) = 0} of dimension k = n - m. Subclasses only have to provide
``function``; the Jacobian defaults to a numeric estimate and projection is a
Newton iteration using a rank-revealing least-squares step.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from constrained_motion.core.global_config import GlobalConfig
from constrained_motion.planning.utils.linalg_utils import least_squares_solve, numeric_jacobian

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from constrained_motion.planning.spec import Jacobian, Residual, State


class Constraint(ABC):
    """Abstract implicit manifold constraint.

    Configuration is fixed at construction apart from the projection
    tolerance and iteration cap. All queries are pure functions of their
    input, so one instance can be shared between planners and threads as long
    as the subclass' ``function``/``jacobian`` are reentrant.

    Example:
        class Plane(Constraint):
            def __init__(self):
                super().__init__(ambient_dim=3, co_dim=1)

            def function(self, x):
                return np.array([x[2]])

        plane = Plane()
        x = np.array([0.3, 0.1, 0.5])
        plane.project(x)  # x is now (0.3, 0.1, 0.0)
    """

    def __init__(
        self,
        ambient_dim: int,
        co_dim: int,
        tolerance: float | None = None,
        max_iterations: int | None = None,
    ):
        """Create a constraint.

        Args:
            ambient_dim: Ambient space dimension n
            co_dim: Number of residual components m (manifold dimension is n - m)
            tolerance: Residual norm accepted as "on the manifold"
                (defaults to GlobalConfig.projection_tolerance)
            max_iterations: Newton iteration cap for project()
                (defaults to GlobalConfig.projection_max_iterations)
        """
        if ambient_dim <= 0:
            raise ValueError(f"Ambient dimension must be positive, got {ambient_dim}")
        if co_dim < 0 or co_dim > ambient_dim:
            raise ValueError(
                f"Co-dimension must be in [0, {ambient_dim}], got {co_dim}"
            )

        config = GlobalConfig() if tolerance is None or max_iterations is None else None
        self._n = ambient_dim
        self._k = ambient_dim - co_dim
        self._tolerance = 0.0
        self._max_iterations = 0
        self.tolerance = tolerance if tolerance is not None else config.projection_tolerance
        self.max_iterations = (
            max_iterations if max_iterations is not None else config.projection_max_iterations
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def tolerance(self) -> float:
        """Projection tolerance."""
        return self._tolerance

    @tolerance.setter
    def tolerance(self, tolerance: float) -> None:
        if not tolerance > 0.0:
            raise ValueError(f"Tolerance must be positive, got {tolerance}")
        self._tolerance = float(tolerance)

    @property
    def max_iterations(self) -> int:
        """Maximum number of Newton iterations in project()."""
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, iterations: int) -> None:
        if iterations <= 0:
            raise ValueError(f"Maximum iterations must be positive, got {iterations}")
        self._max_iterations = int(iterations)

    def get_ambient_dimension(self) -> int:
        return self._n

    def get_manifold_dimension(self) -> int:
        return self._k

    def get_co_dimension(self) -> int:
        return self._n - self._k

    # =========================================================================
    # Queries
    # =========================================================================

    @abstractmethod
    def function(self, x: State) -> Residual:
        """Evaluate the constraint residual F(x), a vector of length m."""

    def jacobian(self, x: State) -> Jacobian:
        """Evaluate the m x n Jacobian of F at x.

        Override with an analytic Jacobian when one is available; the default
        is a numeric estimate costing 6n residual evaluations.
        """
        x = self._check_state(x)
        return numeric_jacobian(self.function, x, self.get_co_dimension())

    def project(self, x: State) -> bool:
        """Project x onto the manifold in place with Newton's method.

        Returns:
            True if the residual norm dropped to within tolerance before
            max_iterations Jacobian steps were spent.
        """
        if not isinstance(x, np.ndarray) or x.dtype != np.float64:
            raise TypeError("project() needs a float64 numpy array to update in place")
        self._check_state(x)

        iteration = 0
        f = self.function(x)
        while np.linalg.norm(f) > self._tolerance and iteration < self._max_iterations:
            iteration += 1
            J = self.jacobian(x)
            if not (np.all(np.isfinite(f)) and np.all(np.isfinite(J))):
                break
            x -= least_squares_solve(J, f)
            f = self.function(x)

        return bool(np.linalg.norm(f) <= self._tolerance)

    def distance(self, x: State) -> float:
        """Distance of x to the manifold, measured as the residual norm."""
        return float(np.linalg.norm(self.function(self._check_state(x))))

    def is_satisfied(self, x: State) -> bool:
        """Check that x is finite and within tolerance of the manifold."""
        x = self._check_state(x)
        return bool(np.all(np.isfinite(x))) and self.distance(x) <= self._tolerance

    def _check_state(self, x: State) -> NDArray[np.float64]:
        x = np.asarray(x, dtype=np.float64)
        if x.shape != (self._n,):
            raise ValueError(f"Expected a state of shape ({self._n},), got {x.shape}")
        return x


class ConstraintIntersection(Constraint):
    """Several constraints over the same ambient space, enforced together.

    The residual and Jacobian are the row-wise stacks of the members', so the
    co-dimension is the sum of the members' co-dimensions.
    """

    def __init__(
        self,
        constraints: Sequence[Constraint],
        tolerance: float | None = None,
        max_iterations: int | None = None,
    ):
        if not constraints:
            raise ValueError("ConstraintIntersection needs at least one constraint")

        ambient_dim = constraints[0].get_ambient_dimension()
        for constraint in constraints:
            if constraint.get_ambient_dimension() != ambient_dim:
                raise ValueError(
                    "All intersected constraints must share the ambient dimension "
                    f"{ambient_dim}, got {constraint.get_ambient_dimension()}"
                )

        super().__init__(
            ambient_dim,
            sum(c.get_co_dimension() for c in constraints),
            tolerance=tolerance,
            max_iterations=max_iterations,
        )
        self._constraints = list(constraints)

    @property
    def constraints(self) -> list[Constraint]:
        return list(self._constraints)

    def function(self, x: State) -> Residual:
        return np.concatenate([np.atleast_1d(c.function(x)) for c in self._constraints])

    def jacobian(self, x: State) -> Jacobian:
        x = self._check_state(x)
        return np.vstack(
            [np.reshape(c.jacobian(x), (c.get_co_dimension(), self._n)) for c in self._constraints]
        )
