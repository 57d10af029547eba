# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Periodic boundary-condition domain."""

from __future__ import annotations

import jax
import jax.numpy as jnp

from dataclasses import dataclass
from typing import ClassVar

from . import Domain


@Domain.register("periodic")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class PeriodicDomain(Domain):
    """
    Orthorhombic periodic cell. Displacements follow the minimum image
    convention, which is only meaningful while the cutoff is at most half of
    the shortest box edge.
    """

    periodic: ClassVar[bool] = True

    def displacement(self, ri: jax.Array, rj: jax.Array) -> jax.Array:
        r"""
        Minimum image displacement:

        .. math::
            r_{ij} = (r_i - r_j) - B \cdot \text{floor}((r_i - r_j)/B + 1/2)

        where :math:`B` is :attr:`Domain.box_size`.
        """
        rij = ri - rj
        return rij - self.box_size * jnp.floor(rij / self.box_size + 0.5)


__all__ = ["PeriodicDomain"]
