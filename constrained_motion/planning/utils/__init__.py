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
Constrained Planning Utilities

Standalone numerical and path helpers shared by constraints and spaces.

## Modules

- linalg_utils: Numeric Jacobians, rank-revealing least squares, null-space bases
- path_utils: Path length, fractional lookup, constraint violation
"""

from constrained_motion.planning.utils.linalg_utils import (
    JacobianFactorization,
    factorize_jacobian,
    least_squares_solve,
    null_space_basis,
    numeric_jacobian,
)
from constrained_motion.planning.utils.path_utils import (
    compute_path_length,
    max_constraint_violation,
    state_at_fraction,
)

__all__ = [
    "JacobianFactorization",
    # Path utilities
    "compute_path_length",
    # Linear algebra utilities
    "factorize_jacobian",
    "least_squares_solve",
    "max_constraint_violation",
    "null_space_basis",
    "numeric_jacobian",
    "state_at_fraction",
]
