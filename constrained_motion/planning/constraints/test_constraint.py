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

"""Tests for implicit manifold constraints."""

from __future__ import annotations

import numpy as np
import pytest

from constrained_motion.planning.constraints import (
    Constraint,
    ConstraintIntersection,
    FunctionConstraint,
    SphereConstraint,
)


class Twisted(Constraint):
    """Two nonlinear residuals in R^3 with a known analytic Jacobian."""

    def __init__(self):
        super().__init__(ambient_dim=3, co_dim=2, tolerance=1e-8, max_iterations=50)

    def function(self, x):
        return np.array([x[0] ** 2 + x[1] * x[2], np.sin(x[0]) * x[2]])

    def analytic_jacobian(self, x):
        return np.array(
            [
                [2.0 * x[0], x[2], x[1]],
                [np.cos(x[0]) * x[2], 0.0, np.sin(x[0])],
            ]
        )


def _plane(**kwargs):
    """z = 0 in R^3."""
    return FunctionConstraint(
        ambient_dim=3,
        co_dim=1,
        function=lambda x: np.array([x[2]]),
        jacobian=lambda x: np.array([[0.0, 0.0, 1.0]]),
        **kwargs,
    )


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    def test_dimensions(self):
        sphere = SphereConstraint(ambient_dim=4)
        assert sphere.get_ambient_dimension() == 4
        assert sphere.get_co_dimension() == 1
        assert sphere.get_manifold_dimension() == 3

    def test_defaults_come_from_global_config(self):
        sphere = SphereConstraint()
        assert sphere.tolerance == pytest.approx(1e-4)
        assert sphere.max_iterations == 50

    @pytest.mark.parametrize("co_dim", [-1, 4])
    def test_rejects_bad_co_dimension(self, co_dim):
        with pytest.raises(ValueError):
            FunctionConstraint(ambient_dim=3, co_dim=co_dim, function=lambda x: x)

    def test_rejects_bad_tolerance_and_iterations(self):
        sphere = SphereConstraint()
        with pytest.raises(ValueError):
            sphere.tolerance = 0.0
        with pytest.raises(ValueError):
            sphere.max_iterations = 0
        with pytest.raises(ValueError):
            SphereConstraint(tolerance=-1.0)

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            Constraint(3, 1)  # type: ignore[abstract]


# =============================================================================
# Jacobian
# =============================================================================


class TestJacobian:
    @pytest.mark.parametrize(
        "x",
        [
            [1e-3, -2e-3, 5e-4],
            [0.3, -0.7, 1.1],
            [2.5, 1.0, -4.0],
            [1e4, -3e3, 2e4],
        ],
    )
    def test_numeric_matches_analytic_sphere(self, x):
        x = np.array(x)
        sphere = SphereConstraint()
        numeric = Constraint.jacobian(sphere, x)
        analytic = sphere.jacobian(x)
        np.testing.assert_allclose(numeric, analytic, atol=1e-6)

    @pytest.mark.parametrize("scale", [1e-4, 1.0, 50.0])
    def test_numeric_matches_analytic_nonlinear(self, scale):
        constraint = Twisted()
        x = scale * np.array([0.4, -1.3, 0.9])
        numeric = constraint.jacobian(x)
        analytic = constraint.analytic_jacobian(x)
        np.testing.assert_allclose(numeric, analytic, rtol=1e-6, atol=1e-6)

    def test_shape(self):
        constraint = Twisted()
        assert constraint.jacobian(np.ones(3)).shape == (2, 3)

    def test_does_not_modify_input(self):
        x = np.array([0.4, -1.3, 0.9])
        before = x.copy()
        Twisted().jacobian(x)
        np.testing.assert_array_equal(x, before)


# =============================================================================
# Projection
# =============================================================================


class TestProjection:
    @pytest.mark.parametrize(
        "x",
        [[1.2, 0.3, -0.1], [0.2, 0.1, 0.05], [-3.0, 2.0, 1.0]],
    )
    def test_converges_to_sphere(self, x):
        sphere = SphereConstraint()
        x = np.array(x)
        assert sphere.project(x) is True
        assert sphere.is_satisfied(x)
        assert np.linalg.norm(x) == pytest.approx(1.0, abs=sphere.tolerance)

    def test_converges_from_neighbourhood(self, rng):
        constraint = ConstraintIntersection([SphereConstraint(), _plane()], tolerance=1e-8)
        for _ in range(10):
            x = np.array([0.7, 0.7, 0.0]) + 0.2 * rng.standard_normal(3)
            assert constraint.project(x)
            assert constraint.distance(x) <= constraint.tolerance

    def test_satisfied_point_unchanged(self):
        sphere = SphereConstraint()
        x = np.array([0.6, 0.8, 0.0])
        before = x.copy()
        assert sphere.project(x)
        np.testing.assert_array_equal(x, before)

    def test_infeasible_stops_after_max_iterations(self):
        calls = []

        def jacobian(x):
            calls.append(x.copy())
            return 2.0 * x[np.newaxis, :]

        never = FunctionConstraint(
            ambient_dim=2,
            co_dim=1,
            function=lambda x: np.array([x @ x + 1.0]),
            jacobian=jacobian,
            max_iterations=17,
        )
        x = np.array([0.5, 0.5])
        assert never.project(x) is False
        assert len(calls) == 17

    def test_non_finite_jacobian_fails(self):
        # The numeric stencil around x0 = 1e-10 samples sqrt at negative x0.
        root = FunctionConstraint(
            ambient_dim=2,
            co_dim=1,
            function=lambda x: np.array([np.sqrt(x[0]) - 1.0]),
        )
        x = np.array([1e-10, 0.0])
        with np.errstate(invalid="ignore"):
            assert root.project(x) is False
        np.testing.assert_array_equal(x, [1e-10, 0.0])

    def test_non_finite_residual_fails(self):
        blowup = FunctionConstraint(
            ambient_dim=2,
            co_dim=1,
            function=lambda x: np.array([np.inf if x[0] < 0.0 else x[0] - 1.0]),
            jacobian=lambda x: np.array([[1.0, 0.0]]),
        )
        assert blowup.project(np.array([-0.5, 0.0])) is False

    def test_needs_float_array(self):
        sphere = SphereConstraint()
        with pytest.raises(TypeError):
            sphere.project([1.2, 0.0, 0.0])
        with pytest.raises(TypeError):
            sphere.project(np.array([2, 0, 0]))

    def test_minimum_norm_step(self):
        plane = _plane()
        x = np.array([0.3, -0.2, 0.7])
        assert plane.project(x)
        np.testing.assert_allclose(x, [0.3, -0.2, 0.0], atol=1e-12)


# =============================================================================
# Distance / satisfaction
# =============================================================================


class TestSatisfaction:
    def test_distance_is_residual_norm(self):
        sphere = SphereConstraint(radius=2.0)
        assert sphere.distance(np.array([3.0, 0.0, 0.0])) == pytest.approx(1.0)
        assert sphere.distance(np.array([0.0, 1.0, 0.0])) == pytest.approx(1.0)

    def test_is_satisfied(self):
        sphere = SphereConstraint(tolerance=1e-3)
        assert sphere.is_satisfied(np.array([0.0, 0.0, 1.0005]))
        assert not sphere.is_satisfied(np.array([0.0, 0.0, 1.01]))

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite_is_never_satisfied(self, bad):
        calls = []

        def function(x):
            calls.append(x)
            return np.array([0.0])

        anything = FunctionConstraint(ambient_dim=2, co_dim=1, function=function)
        assert not anything.is_satisfied(np.array([bad, 0.0]))
        assert calls == []

    def test_dimension_mismatch(self):
        sphere = SphereConstraint(ambient_dim=3)
        with pytest.raises(ValueError):
            sphere.distance(np.zeros(4))
        with pytest.raises(ValueError):
            sphere.jacobian(np.zeros(2))


# =============================================================================
# Intersection
# =============================================================================


class TestIntersection:
    def test_stacks_residuals(self):
        circle = ConstraintIntersection([SphereConstraint(), _plane()], tolerance=1e-8)
        assert circle.get_co_dimension() == 2
        assert circle.get_manifold_dimension() == 1

        x = np.array([2.0, 0.0, 0.5])
        norm = np.sqrt(4.25)
        np.testing.assert_allclose(circle.function(x), [norm - 1.0, 0.5])
        np.testing.assert_allclose(
            circle.jacobian(x), [[2.0 / norm, 0.0, 0.5 / norm], [0.0, 0.0, 1.0]]
        )

    def test_projects_onto_circle(self):
        circle = ConstraintIntersection([SphereConstraint(), _plane()], tolerance=1e-8)
        x = np.array([1.1, 0.2, 0.3])
        assert circle.project(x)
        assert x[2] == pytest.approx(0.0, abs=1e-8)
        assert np.linalg.norm(x) == pytest.approx(1.0, abs=1e-8)

    def test_rejects_mixed_dimensions(self):
        with pytest.raises(ValueError):
            ConstraintIntersection(
                [SphereConstraint(ambient_dim=3), SphereConstraint(ambient_dim=2)]
            )
        with pytest.raises(ValueError):
            ConstraintIntersection([])
