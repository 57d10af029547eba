# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Selection of the candidate pairs handed to the pair kernel."""

from __future__ import annotations

import jax
import jax.numpy as jnp

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..factory import Factory


@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class Collider(Factory, ABC):
    r"""
    Decides which site pairs are evaluated.

    The pair loop computes all site-site squared distances once (through the
    configured :class:`~jaxvdw.domains.Domain`) and asks the collider for the
    candidate mask. Exclusions and the :math:`i < j` ordering are applied by
    the caller, so colliders only deal with geometry and neighbour sets.

    Example
    -------
    >>> @Collider.register("my_collider")
    >>> @jax.tree_util.register_dataclass
    >>> @dataclass(slots=True, frozen=True)
    >>> class MyCollider(Collider):
            ...

    >>> jaxvdw.Collider.create("my_collider", **kw)
    """

    @abstractmethod
    def candidates(self, r2: jax.Array) -> jax.Array:
        """
        Boolean candidate mask of shape ``(N, N)`` from the squared site
        distances ``r2`` of shape ``(N, N)``.
        """
        raise NotImplementedError

    def neighbors(self, i: int, r2: jax.Array) -> jax.Array:
        """Indices ``j != i`` that are candidates for particle ``i``."""
        row = self.candidates(r2)[i]
        row = row.at[i].set(False)
        return jnp.flatnonzero(row)


from .naive import NaiveCollider  # noqa: E402
from .cutoff import CutoffCollider  # noqa: E402
from .neighbor_list import NeighborList  # noqa: E402

__all__ = ["Collider", "NaiveCollider", "CutoffCollider", "NeighborList"]
