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

"""Factory functions for constrained planning components."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from constrained_motion.utils.logging_config import setup_logger

if TYPE_CHECKING:
    from constrained_motion.planning.space_information import SpaceInformation
    from constrained_motion.planning.spec import (
        AmbientSpaceSpec,
        ConstrainedSpaceSpec,
        ConstraintSpec,
        StateValidityCheckerSpec,
    )

logger = setup_logger()


def create_constraint(
    name: str = "sphere",
    **kwargs: Any,
) -> ConstraintSpec:
    """Create a constraint. name='sphere'|'function'."""
    if name == "sphere":
        from constrained_motion.planning.constraints.common import SphereConstraint

        return SphereConstraint(**kwargs)
    elif name == "function":
        from constrained_motion.planning.constraints.common import FunctionConstraint

        return FunctionConstraint(**kwargs)
    else:
        raise ValueError(f"Unknown constraint: {name}. Available: ['sphere', 'function']")


def create_space(
    name: str = "nullspace",
    **kwargs: Any,
) -> AmbientSpaceSpec:
    """Create a state space. name='nullspace'|'real_vector'."""
    if name == "nullspace":
        from constrained_motion.planning.spaces.nullspace_space import NullspaceStateSpace

        return NullspaceStateSpace(**kwargs)
    elif name == "real_vector":
        from constrained_motion.planning.spaces.real_vector_space import RealVectorStateSpace

        return RealVectorStateSpace(**kwargs)
    else:
        raise ValueError(f"Unknown state space: {name}. Available: ['nullspace', 'real_vector']")


def create_space_information(
    constraint: ConstraintSpec,
    state_validity_checker: StateValidityCheckerSpec | None = None,
    **space_kwargs: Any,
) -> tuple[SpaceInformation, ConstrainedSpaceSpec]:
    """Create a set-up constrained stack. Returns (space_information, space)."""
    from constrained_motion.planning.space_information import SpaceInformation
    from constrained_motion.planning.spaces.nullspace_space import NullspaceStateSpace

    space = NullspaceStateSpace(constraint, **space_kwargs)
    si = SpaceInformation(space, state_validity_checker)
    si.setup()
    logger.debug("Created constrained space information", space=type(space).__name__)
    return si, space
