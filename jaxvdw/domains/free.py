# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Unbounded (free) simulation domain."""

from __future__ import annotations

import jax

from dataclasses import dataclass

from . import Domain


@Domain.register("free")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class FreeDomain(Domain):
    """
    Open space without images. Used by ``NoCutoff`` and ``CutoffNonPeriodic``;
    ``box_size`` is carried but never read.
    """

    def displacement(self, ri: jax.Array, rj: jax.Array) -> jax.Array:
        return ri - rj


__all__ = ["FreeDomain"]
