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
Constrained Planning Module

Constraint manifolds and on-manifold motion for sampling-based planners.

## Architecture

- ConstraintSpec: Implicit manifold F(x) = 0 (residual, Jacobian, projection)
  - SphereConstraint, FunctionConstraint, ConstraintIntersection
- ConstrainedSpaceSpec: Ambient space restricted to a constraint
  - NullspaceStateSpace: first-order nullspace traversal between states
- SpaceInformation: State space bound to a validity checker

## Factory Functions

```python
from constrained_motion.planning.factory import create_constraint, create_space_information

constraint = create_constraint(name="sphere", radius=1.0)
si, space = create_space_information(constraint, delta=0.1)

path = []
reached = space.traverse_manifold(start, goal, state_list=path)
```
"""

# Factory functions
from constrained_motion.planning.factory import (
    create_constraint,
    create_space,
    create_space_information,
)
from constrained_motion.planning.space_information import SpaceInformation

# Data classes and Protocols
from constrained_motion.planning.spec import (
    AmbientSpaceSpec,
    ConstrainedSpaceSpec,
    ConstraintSpec,
    IncompatibleSpaceError,
    SpaceType,
    StateValidityCheckerSpec,
    TraversalResult,
    TraversalStatus,
)

__all__ = [
    "AmbientSpaceSpec",
    "ConstrainedSpaceSpec",
    "ConstraintSpec",
    "IncompatibleSpaceError",
    "SpaceInformation",
    "SpaceType",
    "StateValidityCheckerSpec",
    "TraversalResult",
    "TraversalStatus",
    "create_constraint",
    "create_space",
    "create_space_information",
]
