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

import numpy as np
import pytest

from constrained_motion.planning.constraints import SphereConstraint
from constrained_motion.planning.space_information import SpaceInformation
from constrained_motion.planning.spaces import NullspaceStateSpace


@pytest.fixture
def unit_sphere():
    """Unit sphere in R^3, loose enough for first-order traversal with delta=0.1."""
    return SphereConstraint(ambient_dim=3, radius=1.0, tolerance=1e-2, max_iterations=50)


@pytest.fixture
def sphere_space(unit_sphere):
    """Set-up nullspace space over the unit sphere, every state valid."""
    space = NullspaceStateSpace(unit_sphere, delta=0.1, lambda_=5.0)
    SpaceInformation(space).setup()
    return space


@pytest.fixture
def rng():
    return np.random.default_rng(7)
