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

"""Constrained state space that walks the manifold with nullspace corrections.

The space is an ordinary R^n whose states are meant to satisfy a constraint.
Motion between two states is computed by ``traverse_manifold``: repeated
linear steps toward the goal, each corrected to first order at the last
accepted state by removing the constraint violation (normal component) and
keeping only the part of the step tangent to the manifold (nullspace
component).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from constrained_motion.core.global_config import GlobalConfig
from constrained_motion.planning.spaces.real_vector_space import RealVectorStateSpace
from constrained_motion.planning.spec import (
    IncompatibleSpaceError,
    SpaceType,
    TraversalResult,
    TraversalStatus,
)
from constrained_motion.planning.utils.linalg_utils import factorize_jacobian
from constrained_motion.planning.utils.path_utils import compute_path_length, state_at_fraction
from constrained_motion.utils.logging_config import setup_logger

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from constrained_motion.planning.space_information import SpaceInformation
    from constrained_motion.planning.spec import (
        ConstraintSpec,
        State,
        StatePath,
        StateValidityCheckerSpec,
    )

logger = setup_logger()

_EPS = float(np.finfo(np.float64).eps)


class NullspaceStateSpace(RealVectorStateSpace):
    """R^n restricted to the zero set of a constraint.

    Example:
        space = NullspaceStateSpace(SphereConstraint(), delta=0.1)
        si = SpaceInformation(space, checker)
        si.setup()
        path = []
        if space.traverse_manifold(a, b, state_list=path):
            ...
    """

    def __init__(
        self,
        constraint: ConstraintSpec,
        delta: float | None = None,
        lambda_: float | None = None,
        lower_bounds: ArrayLike | None = None,
        upper_bounds: ArrayLike | None = None,
    ):
        """Create a nullspace constrained state space.

        Args:
            constraint: Constraint defining the manifold; fixes the dimension
            delta: Step length of a manifold traversal (defaults to GlobalConfig.delta)
            lambda_: Maximum ratio of geodesic length to ambient distance accepted
                by discrete_geodesic (defaults to GlobalConfig.lambda_)
            lower_bounds: Optional lower bounds of the ambient space
            upper_bounds: Optional upper bounds of the ambient space
        """
        config = GlobalConfig() if delta is None or lambda_ is None else None
        delta = delta if delta is not None else config.delta
        lambda_ = lambda_ if lambda_ is not None else config.lambda_
        if not delta > 0.0:
            raise ValueError(f"Traversal step delta must be positive, got {delta}")
        if not lambda_ >= 1.0:
            raise ValueError(f"Geodesic length ratio lambda_ must be >= 1, got {lambda_}")

        super().__init__(
            constraint.get_ambient_dimension(),
            lower_bounds=lower_bounds,
            upper_bounds=upper_bounds,
            longest_valid_segment=delta,
        )
        self._constraint = constraint
        self._delta = float(delta)
        self._lambda = float(lambda_)
        self._si: SpaceInformation | None = None

    @property
    def space_type(self) -> SpaceType:
        return SpaceType.NULLSPACE

    @property
    def constraint(self) -> ConstraintSpec:
        return self._constraint

    @property
    def delta(self) -> float:
        return self._delta

    @property
    def lambda_(self) -> float:
        return self._lambda

    @staticmethod
    def check_space(si: SpaceInformation) -> None:
        """Raise IncompatibleSpaceError unless si is backed by a NullspaceStateSpace."""
        space_type = getattr(si.state_space, "space_type", None)
        if space_type is not SpaceType.NULLSPACE:
            logger.error(
                "Space information is not backed by a nullspace state space",
                space_type=str(space_type),
            )
            raise IncompatibleSpaceError(
                f"NullspaceStateSpace: space information needs a NULLSPACE state space, "
                f"got {space_type}"
            )

    def setup(self, si: SpaceInformation) -> None:
        if si.state_space is not self:
            raise IncompatibleSpaceError(
                "NullspaceStateSpace can only be set up by a space information that owns it"
            )
        self.check_space(si)
        self._si = si
        logger.info(
            "Nullspace state space ready",
            ambient_dim=self.get_dimension(),
            manifold_dim=self._constraint.get_manifold_dimension(),
            delta=self._delta,
        )

    # =========================================================================
    # Manifold traversal
    # =========================================================================

    def traverse_manifold(
        self,
        start: State,
        goal: State,
        interpolate: bool = False,
        state_list: StatePath | None = None,
    ) -> bool:
        """Walk along the manifold from start toward goal.

        Args:
            start: State on the manifold to start from (not modified)
            goal: State to walk toward (not modified)
            interpolate: Skip validity checks of intermediate states
            state_list: Optional sink. Cleared, then filled with a copy of start,
                every accepted intermediate state, and a copy of goal on success.

        Returns:
            True if the walk got within one step of goal.
        """
        status, _ = self._walk(start, goal, interpolate, state_list)
        return status == TraversalStatus.REACHED

    def discrete_geodesic(
        self, start: State, goal: State, interpolate: bool = False
    ) -> TraversalResult:
        """Compute a discretized on-manifold path from start to goal.

        A walk that reaches the goal is still rejected (status TOO_LONG) when
        its length exceeds lambda_ times the ambient distance of the endpoints.
        """
        path: StatePath = []
        status, steps = self._walk(start, goal, interpolate, path)

        if status == TraversalStatus.REACHED:
            if compute_path_length(path) > self._lambda * self.distance(start, goal):
                status = TraversalStatus.TOO_LONG

        return TraversalResult(status=status, path=path, steps=steps)

    def manifold_interpolate(self, start: State, goal: State, t: float) -> State:
        """State at fraction t of the on-manifold path from start to goal.

        If the walk is blocked, the fraction is taken along the partial path.
        """
        path: StatePath = []
        self._walk(start, goal, True, path)
        return state_at_fraction(path, t)

    def _walk(
        self,
        start: State,
        goal: State,
        interpolate: bool,
        state_list: StatePath | None,
    ) -> tuple[TraversalStatus, int]:
        start = self._as_state(start)
        goal = self._as_state(goal)

        n_segments = self.valid_segment_count(start, goal)

        if state_list is not None:
            state_list.clear()
            state_list.append(self.clone_state(start))

        if n_segments == 0:
            return TraversalStatus.REACHED, 0

        if not self._constraint.is_satisfied(start):
            return TraversalStatus.INVALID_START, 0

        checker = None if interpolate else self._validity_checker()
        delta = self._delta
        dist = self.distance(start, goal)
        previous = self.clone_state(start)
        steps = 0

        while dist >= delta + _EPS:
            scratch = self.interpolate(previous, goal, delta / dist)

            # Linearize at the last accepted state, not at the trial state
            f = self._constraint.function(previous)
            J = self._constraint.jacobian(previous)
            if not (np.all(np.isfinite(f)) and np.all(np.isfinite(J))):
                return TraversalStatus.NON_FINITE, steps
            factorization = factorize_jacobian(J)
            kernel = factorization.kernel()[:, ::-1]
            scratch = (
                previous
                - factorization.solve(f)
                + kernel @ (kernel.T @ (scratch - previous))
            )

            if checker is not None and not checker.is_valid(scratch):
                return TraversalStatus.INVALID_STATE, steps

            if not self.distance(previous, scratch) <= 2.0 * delta:
                return TraversalStatus.DEVIATED, steps

            if state_list is not None:
                state_list.append(scratch.copy())

            new_dist = self.distance(scratch, goal)
            if not new_dist < dist:
                return TraversalStatus.DIVERGED, steps
            steps += 1

            dist = new_dist
            previous = scratch

        if state_list is not None:
            state_list.append(self.clone_state(goal))
        return TraversalStatus.REACHED, steps

    def _validity_checker(self) -> StateValidityCheckerSpec:
        if self._si is None:
            raise RuntimeError(
                "NullspaceStateSpace must be set up through SpaceInformation.setup() "
                "before checking state validity"
            )
        return self._si.state_validity_checker
