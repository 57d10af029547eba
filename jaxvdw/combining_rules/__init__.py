# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Combining rules that build pairwise sigma and epsilon from per-particle values."""

from __future__ import annotations

import jax

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..factory import Factory


@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class CombiningRule(Factory, ABC):
    """
    Common interface of the sigma and epsilon combining rules.

    A rule is a pure function of two per-particle values. It is chosen once,
    when the force object is built, and never changes afterwards.
    """

    @staticmethod
    @abstractmethod
    @jax.jit
    def combine(x: jax.Array, y: jax.Array) -> jax.Array:
        """Return the pairwise value built from ``x`` and ``y``. Broadcasts."""
        raise NotImplementedError


@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class SigmaCombiningRule(CombiningRule, ABC):
    """
    Registry of size combining rules.

    Example
    -------
    >>> rule = SigmaCombiningRule.create("cubic-mean")
    >>> rule.combine(jnp.array(3.0), jnp.array(4.0))
    """


@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class EpsilonCombiningRule(CombiningRule, ABC):
    """
    Registry of well-depth combining rules.

    Example
    -------
    >>> rule = EpsilonCombiningRule.create("HHG")
    >>> rule.combine(jnp.array(0.1), jnp.array(0.2))
    """


from .sigma import (  # noqa: E402,F401
    ArithmeticSigmaRule,
    GeometricSigmaRule,
    CubicMeanSigmaRule,
)
from .epsilon import (  # noqa: E402,F401
    ArithmeticEpsilonRule,
    GeometricEpsilonRule,
    HarmonicEpsilonRule,
    HHGEpsilonRule,
)

__all__ = [
    "CombiningRule",
    "SigmaCombiningRule",
    "EpsilonCombiningRule",
    "ArithmeticSigmaRule",
    "GeometricSigmaRule",
    "CubicMeanSigmaRule",
    "ArithmeticEpsilonRule",
    "GeometricEpsilonRule",
    "HarmonicEpsilonRule",
    "HHGEpsilonRule",
]
