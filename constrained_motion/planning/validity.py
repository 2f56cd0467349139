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

"""State validity checkers."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from constrained_motion.planning.spec import State


class AllValidStateValidityChecker:
    """Treats every state as valid (pure manifold interpolation)."""

    def is_valid(self, state: State) -> bool:
        return True


class FunctionStateValidityChecker:
    """Wraps a plain predicate, e.g. a collision query from a world backend."""

    def __init__(self, predicate: Callable[[State], bool]):
        self._predicate = predicate

    def is_valid(self, state: State) -> bool:
        return bool(self._predicate(state))
