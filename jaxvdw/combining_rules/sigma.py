# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Size (sigma) combining rules."""

from __future__ import annotations

import jax
import jax.numpy as jnp

from dataclasses import dataclass
from functools import partial

from . import SigmaCombiningRule


@SigmaCombiningRule.register("arithmetic")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class ArithmeticSigmaRule(SigmaCombiningRule):
    r"""
    Arithmetic mean, the default size rule:

    .. math::
        \sigma_{ij} = \frac{\sigma_i + \sigma_j}{2}
    """

    @staticmethod
    @jax.jit
    @partial(jax.named_call, name="ArithmeticSigmaRule.combine")
    def combine(x: jax.Array, y: jax.Array) -> jax.Array:
        return (x + y) / 2


@SigmaCombiningRule.register("geometric")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class GeometricSigmaRule(SigmaCombiningRule):
    r"""
    Geometric mean:

    .. math::
        \sigma_{ij} = \sqrt{\sigma_i \sigma_j}
    """

    @staticmethod
    @jax.jit
    @partial(jax.named_call, name="GeometricSigmaRule.combine")
    def combine(x: jax.Array, y: jax.Array) -> jax.Array:
        return jnp.sqrt(x * y)


@SigmaCombiningRule.register("cubic-mean")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class CubicMeanSigmaRule(SigmaCombiningRule):
    r"""
    Cubic mean used by the AMOEBA force field:

    .. math::
        \sigma_{ij} = \frac{\sigma_i^3 + \sigma_j^3}{\sigma_i^2 + \sigma_j^2}

    Returns 0 when either sigma is 0.
    """

    @staticmethod
    @jax.jit
    @partial(jax.named_call, name="CubicMeanSigmaRule.combine")
    def combine(x: jax.Array, y: jax.Array) -> jax.Array:
        x2 = x * x
        y2 = y * y
        valid = (x != 0) & (y != 0)
        denom = jnp.where(valid, x2 + y2, 1.0)
        return jnp.where(valid, (x2 * x + y2 * y) / denom, 0.0)


__all__ = ["ArithmeticSigmaRule", "GeometricSigmaRule", "CubicMeanSigmaRule"]
