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
Linear Algebra Utilities

Standalone numerical primitives used by constraints and constrained spaces.
These functions are stateless.

## Functions

- numeric_jacobian(): Richardson-extrapolated central difference Jacobian
- factorize_jacobian(): Rank-revealing QR of a Jacobian (least squares + kernel)
- least_squares_solve(): Minimum-norm solution of J d = f
- null_space_basis(): Orthonormal basis of the kernel of J
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import scipy.linalg

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from constrained_motion.planning.spec import Jacobian

_SQRT_EPS = float(np.sqrt(np.finfo(np.float64).eps))


def numeric_jacobian(
    function: Callable[[NDArray[np.float64]], NDArray[np.float64]],
    x: NDArray[np.float64],
    co_dimension: int,
) -> NDArray[np.float64]:
    """Estimate the Jacobian of ``function`` at ``x`` column by column.

    Each column uses a 7-point central difference stencil: derivative estimates
    m1, m2, m3 at steps h, 2h, 3h are combined as 1.5*m1 - 0.6*m2 + 0.1*m3,
    which cancels the leading truncation error terms.

    Args:
        function: Residual function R^n -> R^m
        x: Point to differentiate at (length n, not modified)
        co_dimension: m, the residual length

    Returns:
        m x n Jacobian estimate
    """
    x = np.asarray(x, dtype=np.float64)
    n = x.shape[0]
    out = np.empty((co_dimension, n), dtype=np.float64)
    y1 = x.copy()
    y2 = x.copy()

    for j in range(n):
        h = _SQRT_EPS * max(abs(x[j]), 1.0)

        estimates = []
        for _ in range(3):
            y1[j] += h
            y2[j] -= h
            # y1[j] - y2[j] is the realised step, not exactly 2*h*i
            estimates.append((function(y1) - function(y2)) / (y1[j] - y2[j]))
        m1, m2, m3 = estimates

        out[:, j] = 1.5 * m1 - 0.6 * m2 + 0.1 * m3

        y1[j] = y2[j] = x[j]

    return out


@dataclass(frozen=True)
class JacobianFactorization:
    """Column-pivoted QR of J^T, giving both a solver and a kernel basis.

    With J^T P = Q R, the first ``rank`` columns of Q span the row space of J
    and the remaining columns span its null space.
    """

    q: NDArray[np.float64]
    r: NDArray[np.float64]
    permutation: NDArray[np.intp]
    rank: int

    def solve(self, f: NDArray[np.float64]) -> NDArray[np.float64]:
        """Minimum-norm d with J d = f (restricted to the numerical rank)."""
        n = self.q.shape[0]
        if self.rank == 0:
            return np.zeros(n, dtype=np.float64)
        b = np.asarray(f, dtype=np.float64)[self.permutation][: self.rank]
        y = scipy.linalg.solve_triangular(
            self.r[: self.rank, : self.rank], b, trans="T", lower=False
        )
        result: NDArray[np.float64] = self.q[:, : self.rank] @ y
        return result

    def kernel(self) -> NDArray[np.float64]:
        """Orthonormal n x (n - rank) basis of the null space of J."""
        return self.q[:, self.rank :]


def factorize_jacobian(J: Jacobian) -> JacobianFactorization:
    """Factor an m x n Jacobian with a rank-revealing QR of its transpose."""
    J = np.atleast_2d(np.asarray(J, dtype=np.float64))
    m, n = J.shape
    if m == 0:
        return JacobianFactorization(
            q=np.eye(n), r=np.zeros((n, 0)), permutation=np.arange(0), rank=0
        )

    q, r, permutation = scipy.linalg.qr(J.T, pivoting=True)
    diagonal = np.abs(np.diag(r))
    threshold = (diagonal[0] if diagonal.size else 0.0) * max(m, n) * np.finfo(np.float64).eps
    rank = int(np.count_nonzero(diagonal > threshold))
    return JacobianFactorization(q=q, r=r, permutation=permutation, rank=rank)


def least_squares_solve(J: Jacobian, f: NDArray[np.float64]) -> NDArray[np.float64]:
    """Minimum-norm correction d solving J d = f in the least-squares sense.

    Example:
        J = constraint.jacobian(x)
        x -= least_squares_solve(J, constraint.function(x))
    """
    return factorize_jacobian(J).solve(f)


def null_space_basis(J: Jacobian) -> NDArray[np.float64]:
    """Orthonormal basis (as columns) of the tangent space {v : J v = 0}."""
    return factorize_jacobian(J).kernel()
