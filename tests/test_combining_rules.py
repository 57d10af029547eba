"""
Tests for the sigma and epsilon combining rules.
"""

import jax.numpy as jnp
import numpy as np
import pytest

from jaxvdw import EpsilonCombiningRule, InvalidConfiguration, SigmaCombiningRule


class TestRegistry:

    def test_available_rules(self):
        assert SigmaCombiningRule.available() == ["arithmetic", "geometric", "cubic-mean"]
        assert EpsilonCombiningRule.available() == [
            "arithmetic",
            "geometric",
            "harmonic",
            "hhg",
        ]

    @pytest.mark.parametrize("name", ["Cubic-Mean", "CUBIC-MEAN", " cubic-mean "])
    def test_names_are_case_insensitive(self, name):
        rule = SigmaCombiningRule.create(name)
        assert rule.type_name == "cubic-mean"

    def test_unknown_sigma_rule_is_rejected(self):
        with pytest.raises(InvalidConfiguration, match="bogus"):
            SigmaCombiningRule.create("bogus")

    def test_unknown_epsilon_rule_is_rejected(self):
        with pytest.raises(InvalidConfiguration, match="bogus"):
            EpsilonCombiningRule.create("bogus")

    def test_registries_are_separate(self):
        # harmonic is a well-depth rule only, cubic-mean a size rule only
        with pytest.raises(InvalidConfiguration):
            SigmaCombiningRule.create("harmonic")
        with pytest.raises(InvalidConfiguration):
            EpsilonCombiningRule.create("cubic-mean")


class TestSigmaRules:

    @pytest.mark.parametrize("name", ["arithmetic", "geometric", "cubic-mean"])
    def test_equal_values_are_preserved(self, name):
        rule = SigmaCombiningRule.create(name)
        for s in [0.2655, 0.3405, 1.0, 3.7]:
            assert float(rule.combine(jnp.array(s), jnp.array(s))) == pytest.approx(s, rel=1e-14)

    def test_known_values(self):
        x, y = jnp.array(3.0), jnp.array(4.0)
        assert float(SigmaCombiningRule.create("arithmetic").combine(x, y)) == pytest.approx(3.5)
        assert float(SigmaCombiningRule.create("geometric").combine(x, y)) == pytest.approx(np.sqrt(12.0))
        assert float(SigmaCombiningRule.create("cubic-mean").combine(x, y)) == pytest.approx(91.0 / 25.0)

    def test_cubic_mean_with_zero_sigma(self):
        rule = SigmaCombiningRule.create("cubic-mean")
        assert float(rule.combine(jnp.array(0.0), jnp.array(0.3))) == 0.0
        assert float(rule.combine(jnp.array(0.0), jnp.array(0.0))) == 0.0

    def test_broadcasting(self):
        rule = SigmaCombiningRule.create("arithmetic")
        s = jnp.array([1.0, 2.0, 3.0])
        table = rule.combine(s[:, None], s[None, :])
        assert table.shape == (3, 3)
        np.testing.assert_allclose(table, table.T)
        assert float(table[0, 2]) == 2.0


class TestEpsilonRules:

    @pytest.mark.parametrize("name", ["arithmetic", "geometric", "harmonic", "hhg"])
    def test_equal_values_are_preserved(self, name):
        rule = EpsilonCombiningRule.create(name)
        for e in [0.056, 0.46, 1.0]:
            assert float(rule.combine(jnp.array(e), jnp.array(e))) == pytest.approx(e, rel=1e-14)

    def test_known_values(self):
        x, y = jnp.array(1.0), jnp.array(4.0)
        assert float(EpsilonCombiningRule.create("arithmetic").combine(x, y)) == pytest.approx(2.5)
        assert float(EpsilonCombiningRule.create("geometric").combine(x, y)) == pytest.approx(2.0)
        assert float(EpsilonCombiningRule.create("harmonic").combine(x, y)) == pytest.approx(1.6)
        assert float(EpsilonCombiningRule.create("hhg").combine(x, y)) == pytest.approx(16.0 / 9.0)

    @pytest.mark.parametrize("name", ["harmonic", "hhg"])
    def test_zero_denominator_gives_zero(self, name):
        rule = EpsilonCombiningRule.create(name)
        value = rule.combine(jnp.array(0.0), jnp.array(0.0))
        assert np.isfinite(float(value))
        assert float(value) == 0.0

    @pytest.mark.parametrize("name", ["harmonic", "hhg"])
    def test_one_zero_epsilon_gives_zero(self, name):
        rule = EpsilonCombiningRule.create(name)
        assert float(rule.combine(jnp.array(0.0), jnp.array(0.5))) == 0.0
