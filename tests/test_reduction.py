"""
Tests for reduced interaction sites and force redistribution.
"""

import logging

import jax.numpy as jnp
import numpy as np
import pytest

from jaxvdw import DataInvariantViolation, ReductionSite


POSITIONS = jnp.array(
    [
        [0.1, -0.2, 0.3],
        [1.7, 0.4, -2.2],
        [-0.9, 3.3, 0.05],
    ]
)


class TestResolve:

    def test_factor_zero_is_identity(self):
        sites = ReductionSite.Create([1, 2, 0], [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(sites.resolve(POSITIONS), POSITIONS)

    def test_factor_one_moves_to_partner(self):
        sites = ReductionSite.Create([1, 2, 0], [1.0, 1.0, 1.0])
        np.testing.assert_array_equal(sites.resolve(POSITIONS), POSITIONS[jnp.array([1, 2, 0])])

    def test_self_partner_is_unchanged(self):
        # factor is ignored when the particle is its own partner
        sites = ReductionSite.Create([0, 1, 2], [0.37, 0.91, 0.5])
        np.testing.assert_array_equal(sites.resolve(POSITIONS), POSITIONS)

    def test_interpolation(self):
        sites = ReductionSite.Create([0, 0, 2], [0.0, 0.91, 0.0])
        resolved = sites.resolve(POSITIONS)
        expected = 0.91 * POSITIONS[0] + (1.0 - 0.91) * POSITIONS[1]
        np.testing.assert_allclose(resolved[1], expected, rtol=1e-14)
        np.testing.assert_array_equal(resolved[0], POSITIONS[0])
        np.testing.assert_array_equal(resolved[2], POSITIONS[2])

    def test_reduced_mask(self):
        sites = ReductionSite.Create([0, 0, 2], [0.0, 0.91, 0.0])
        assert sites.N == 3
        assert list(np.asarray(sites.reduced)) == [False, True, False]


class TestRedistribute:

    def test_split_by_factor(self):
        sites = ReductionSite.Create([1, 1, 2], [0.25, 0.0, 0.0])
        f = jnp.array([[1.0, 2.0, 3.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
        out = sites.redistribute(f, jnp.zeros((3, 3)))
        np.testing.assert_allclose(out[0], 0.75 * f[0])
        np.testing.assert_allclose(out[1], 0.25 * f[0])
        np.testing.assert_array_equal(out[2], jnp.zeros(3))

    def test_is_additive(self):
        sites = ReductionSite.Create([1, 1, 2], [0.25, 0.0, 0.0])
        f = jnp.array([[1.0, 2.0, 3.0], [-1.0, 0.5, 0.0], [0.0, 0.0, 4.0]])
        buffer = jnp.full((3, 3), 10.0)
        out = sites.redistribute(f, buffer)
        fresh = sites.redistribute(f, jnp.zeros((3, 3)))
        np.testing.assert_allclose(out, buffer + fresh)

    def test_total_force_is_conserved(self):
        sites = ReductionSite.Create([2, 0, 1], [0.3, 0.6, 0.9])
        f = jnp.array([[1.0, -2.0, 0.5], [0.2, 0.2, -0.7], [3.0, 0.0, 1.0]])
        out = sites.redistribute(f, jnp.zeros((3, 3)))
        np.testing.assert_allclose(out.sum(axis=0), f.sum(axis=0), atol=1e-14)


class TestValidation:

    def test_partner_out_of_range(self):
        with pytest.raises(DataInvariantViolation, match="partner 3"):
            ReductionSite.Create([0, 3, 2], [0.0, 0.5, 0.0])

    def test_negative_partner(self):
        with pytest.raises(DataInvariantViolation):
            ReductionSite.Create([0, -1, 2], [0.0, 0.5, 0.0])

    def test_non_integer_partner(self):
        with pytest.raises(DataInvariantViolation, match="integers"):
            ReductionSite.Create([0.0, 1.0, 2.0], [0.0, 0.5, 0.0])

    def test_factor_outside_range_strict(self):
        with pytest.raises(DataInvariantViolation, match="outside"):
            ReductionSite.Create([1, 1, 2], [1.2, 0.0, 0.0])

    def test_non_finite_factor(self):
        with pytest.raises(DataInvariantViolation, match="finite"):
            ReductionSite.Create([1, 1, 2], [np.nan, 0.0, 0.0], strict=False)

    def test_factor_outside_range_lenient_clamps(self, caplog):
        with caplog.at_level(logging.WARNING, logger="jaxvdw.reduction"):
            sites = ReductionSite.Create([1, 1, 0], [1.2, 0.0, -0.5], strict=False)
        assert "Clamping 2 reduction factor(s)" in caplog.text
        np.testing.assert_array_equal(sites.factor, jnp.array([1.0, 0.0, 0.0]))
        np.testing.assert_array_equal(sites.resolve(POSITIONS)[0], POSITIONS[1])
