# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Naive :math:`O(N^2)` collider implementation."""

from __future__ import annotations

import jax
import jax.numpy as jnp

from dataclasses import dataclass

from . import Collider


@Collider.register("naive")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class NaiveCollider(Collider):
    """
    Every pair is a candidate. This is the ``NoCutoff`` method: the full set
    of :math:`N^2` interactions is evaluated exactly.
    """

    def candidates(self, r2: jax.Array) -> jax.Array:
        return jnp.ones(r2.shape, dtype=bool)


__all__ = ["NaiveCollider"]
