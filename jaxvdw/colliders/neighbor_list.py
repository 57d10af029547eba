# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Collider fed by an external neighbour search."""

from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..errors import DataInvariantViolation, InvalidConfiguration
from . import Collider

try:  # Python 3.11+
    from typing import Self
except ImportError:  # pragma: no cover - fallback for older Python
    from typing_extensions import Self  # type: ignore


@Collider.register("neighborlist")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class NeighborList(Collider):
    """
    Candidate pairs produced by a spatial partitioner outside this package
    (cell list, Verlet list, ...).

    ``neighbors[i]`` holds the particles the partitioner found near ``i``. A
    pair is a candidate when either side lists the other. Lists built with a
    skin can carry pairs beyond the interaction range; pass ``cutoff`` to drop
    them again.
    """

    table: jax.Array
    """``(N, N)`` symmetric boolean candidate table."""

    cutoff: Optional[float] = None

    @classmethod
    def Create(
        cls,
        neighbors: Sequence[Iterable[int]],
        cutoff: Optional[float] = None,
    ) -> Self:
        """
        Parameters
        ----------
        neighbors : Sequence[Iterable[int]]
            One iterable of neighbour indices per particle.
        cutoff : float, optional
            Extra distance filter applied on top of the lists.

        Raises
        ------
        DataInvariantViolation
            If a neighbour index is not an integer or is outside ``[0, N)``.
        InvalidConfiguration
            If ``cutoff`` is given and not positive.
        """
        n = len(neighbors)
        table = np.zeros((n, n), dtype=bool)
        for i, near in enumerate(neighbors):
            idx = np.asarray(list(near)).reshape(-1)
            if idx.size and not np.issubdtype(idx.dtype, np.integer):
                raise DataInvariantViolation(
                    f"Neighbours of particle {i} must be integer indices, got {idx.tolist()!r}"
                )
            idx = idx.astype(int)
            bad = idx[(idx < 0) | (idx >= n)]
            if bad.size:
                raise DataInvariantViolation(
                    f"Particle {i} lists neighbour {int(bad[0])} outside [0, {n})"
                )
            table[i, idx] = True
        table |= table.T

        if cutoff is not None:
            cutoff = float(cutoff)
            if not cutoff > 0.0:
                raise InvalidConfiguration(f"cutoff must be positive, got {cutoff!r}")
        return cls(table=jnp.asarray(table), cutoff=cutoff)

    @property
    def N(self) -> int:
        return self.table.shape[0]

    def candidates(self, r2: jax.Array) -> jax.Array:
        if self.cutoff is None:
            return self.table
        return self.table & (r2 <= self.cutoff * self.cutoff)


__all__ = ["NeighborList"]
