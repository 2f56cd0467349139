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

"""Binding of a state space to a state validity checker."""

from __future__ import annotations

from typing import TYPE_CHECKING

from constrained_motion.planning.validity import AllValidStateValidityChecker

if TYPE_CHECKING:
    from constrained_motion.planning.spec import (
        AmbientSpaceSpec,
        State,
        StateValidityCheckerSpec,
    )


class SpaceInformation:
    """State space plus validity oracle, as seen by planners and traversals.

    Example:
        si = SpaceInformation(space, FunctionStateValidityChecker(world_is_free))
        si.setup()  # lets the space verify it can work with this binding
    """

    def __init__(
        self,
        state_space: AmbientSpaceSpec,
        state_validity_checker: StateValidityCheckerSpec | None = None,
    ):
        self._state_space = state_space
        self._checker = state_validity_checker or AllValidStateValidityChecker()
        self._is_setup = False

    @property
    def state_space(self) -> AmbientSpaceSpec:
        return self._state_space

    @property
    def state_validity_checker(self) -> StateValidityCheckerSpec:
        return self._checker

    @state_validity_checker.setter
    def state_validity_checker(self, checker: StateValidityCheckerSpec) -> None:
        self._checker = checker

    @property
    def is_setup(self) -> bool:
        return self._is_setup

    def setup(self) -> None:
        """Let the state space bind itself to this space information."""
        self._state_space.setup(self)
        self._is_setup = True

    def is_valid(self, state: State) -> bool:
        return self._checker.is_valid(state)

    def clone_state(self, state: State) -> State:
        return self._state_space.clone_state(state)

    def distance(self, state1: State, state2: State) -> float:
        return self._state_space.distance(state1, state2)
