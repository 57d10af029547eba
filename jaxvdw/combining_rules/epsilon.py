# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Well-depth (epsilon) combining rules."""

from __future__ import annotations

import jax
import jax.numpy as jnp

from dataclasses import dataclass
from functools import partial

from . import EpsilonCombiningRule


@EpsilonCombiningRule.register("arithmetic")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class ArithmeticEpsilonRule(EpsilonCombiningRule):
    r"""
    Arithmetic mean, the default well-depth rule:

    .. math::
        \epsilon_{ij} = \frac{\epsilon_i + \epsilon_j}{2}
    """

    @staticmethod
    @jax.jit
    @partial(jax.named_call, name="ArithmeticEpsilonRule.combine")
    def combine(x: jax.Array, y: jax.Array) -> jax.Array:
        return (x + y) / 2


@EpsilonCombiningRule.register("geometric")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class GeometricEpsilonRule(EpsilonCombiningRule):
    r"""
    Geometric mean:

    .. math::
        \epsilon_{ij} = \sqrt{\epsilon_i \epsilon_j}
    """

    @staticmethod
    @jax.jit
    @partial(jax.named_call, name="GeometricEpsilonRule.combine")
    def combine(x: jax.Array, y: jax.Array) -> jax.Array:
        return jnp.sqrt(x * y)


@EpsilonCombiningRule.register("harmonic")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class HarmonicEpsilonRule(EpsilonCombiningRule):
    r"""
    Harmonic mean:

    .. math::
        \epsilon_{ij} = \frac{2 \epsilon_i \epsilon_j}{\epsilon_i + \epsilon_j}

    Returns 0 when :math:`\epsilon_i + \epsilon_j = 0`.
    """

    @staticmethod
    @jax.jit
    @partial(jax.named_call, name="HarmonicEpsilonRule.combine")
    def combine(x: jax.Array, y: jax.Array) -> jax.Array:
        s = x + y
        valid = s != 0
        return jnp.where(valid, 2 * x * y / jnp.where(valid, s, 1.0), 0.0)


@EpsilonCombiningRule.register("hhg")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class HHGEpsilonRule(EpsilonCombiningRule):
    r"""
    Halgren's HHG rule:

    .. math::
        \epsilon_{ij} = \frac{4 \epsilon_i \epsilon_j}{(\sqrt{\epsilon_i} + \sqrt{\epsilon_j})^2}

    Returns 0 when the denominator vanishes.
    """

    @staticmethod
    @jax.jit
    @partial(jax.named_call, name="HHGEpsilonRule.combine")
    def combine(x: jax.Array, y: jax.Array) -> jax.Array:
        s = jnp.sqrt(x) + jnp.sqrt(y)
        valid = s != 0
        s = jnp.where(valid, s, 1.0)
        return jnp.where(valid, 4 * x * y / (s * s), 0.0)


__all__ = [
    "ArithmeticEpsilonRule",
    "GeometricEpsilonRule",
    "HarmonicEpsilonRule",
    "HHGEpsilonRule",
]
