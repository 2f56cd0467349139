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
State Spaces Module

Ambient and constrained state spaces.

## Implementations

- RealVectorStateSpace: R^n, Euclidean metric, linear interpolation
- NullspaceStateSpace: R^n restricted to a constraint manifold, traversed
  with first-order nullspace corrections
"""

from constrained_motion.planning.spaces.nullspace_space import NullspaceStateSpace
from constrained_motion.planning.spaces.real_vector_space import RealVectorStateSpace

__all__ = ["NullspaceStateSpace", "RealVectorStateSpace"]
