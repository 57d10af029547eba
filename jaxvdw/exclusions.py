# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Pairs that must not interact through the van der Waals term."""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp
import numpy as np

from dataclasses import dataclass
from typing import Iterable, Sequence

from .errors import DataInvariantViolation

try:  # Python 3.11+
    from typing import Self
except ImportError:  # pragma: no cover - fallback for older Python
    from typing_extensions import Self  # type: ignore

logger = logging.getLogger(__name__)


@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class Exclusions:
    """
    Per-particle exclusion sets stored as a dense ``(N, N)`` boolean table.

    Row ``i`` holds the set declared for particle ``i``. Exclusion lists are
    short (bonded neighbours), so the table is built once on the host and the
    pair loop reads it with a single mask.
    """

    table: jax.Array
    """``table[i, j]`` is True when ``j`` is in the exclusion set of ``i``."""

    @classmethod
    def from_lists(
        cls,
        exclusions: Sequence[Iterable[int]],
        n: int,
        *,
        strict: bool = True,
    ) -> Self:
        """
        Build the table from one iterable of excluded indices per particle.

        Parameters
        ----------
        exclusions : Sequence[Iterable[int]]
            ``exclusions[i]`` lists the partners excluded for particle ``i``.
            Listing ``i`` itself is allowed and has no effect.
        n : int
            Number of particles.
        strict : bool, default True
            Reject asymmetric sets. When False, an asymmetric set is logged
            and the pair loop consults only the set of the lower index.

        Raises
        ------
        DataInvariantViolation
            Non-integer or out of range index (always) or asymmetric sets
            (strict mode).
        """
        table = np.zeros((n, n), dtype=bool)
        for i, excluded in enumerate(exclusions):
            idx = np.asarray(list(excluded)).reshape(-1)
            if idx.size and not np.issubdtype(idx.dtype, np.integer):
                raise DataInvariantViolation(
                    f"Exclusions of particle {i} must be integer indices, got {idx.tolist()!r}"
                )
            idx = idx.astype(int)
            bad = idx[(idx < 0) | (idx >= n)]
            if bad.size:
                raise DataInvariantViolation(
                    f"Particle {i} excludes index {int(bad[0])} outside [0, {n})"
                )
            table[i, idx] = True
        np.fill_diagonal(table, False)

        asymmetric = np.argwhere(table != table.T)
        if asymmetric.size:
            i, j = (int(k) for k in asymmetric[0])
            if not table[i, j]:
                i, j = j, i
            if strict:
                raise DataInvariantViolation(
                    f"Exclusions are not symmetric: {i} excludes {j} but {j} does not exclude {i}"
                )
            logger.warning(
                "Exclusions are not symmetric for %d pair(s) (first: %d excludes %d); "
                "using the set of the lower index",
                asymmetric.shape[0] // 2,
                i,
                j,
            )

        return cls(table=jnp.asarray(table))

    @classmethod
    def none(cls, n: int) -> Self:
        return cls(table=jnp.zeros((n, n), dtype=bool))

    def is_excluded(self, i: int, j: int) -> bool:
        """Whether ``j`` belongs to the exclusion set of ``i``."""
        return bool(self.table[i, j])

    @property
    def pair_mask(self) -> jax.Array:
        """
        Exclusions as seen by the ``i < j`` pair loop: entry ``(i, j)`` is
        taken from the set of ``i`` and mirrored onto ``(j, i)``.
        """
        upper = jnp.triu(self.table, k=1)
        return upper | upper.T

    @property
    def count(self) -> int:
        """Number of excluded unordered pairs."""
        return int(jnp.sum(jnp.triu(self.table, k=1)))


__all__ = ["Exclusions"]
