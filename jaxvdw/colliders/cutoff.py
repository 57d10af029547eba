# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Brute-force distance cutoff collider."""

from __future__ import annotations

import jax

from dataclasses import dataclass

from ..errors import InvalidConfiguration
from . import Collider

try:  # Python 3.11+
    from typing import Self
except ImportError:  # pragma: no cover - fallback for older Python
    from typing_extensions import Self  # type: ignore


@Collider.register("cutoff")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class CutoffCollider(Collider):
    """
    Pairs whose sites are at most ``cutoff`` apart. Distances come from the
    domain, so with a periodic domain the nearest image is used.
    """

    cutoff: float

    @classmethod
    def Create(cls, cutoff: float) -> Self:
        cutoff = float(cutoff)
        if not cutoff > 0.0:
            raise InvalidConfiguration(f"cutoff must be positive, got {cutoff!r}")
        return cls(cutoff=cutoff)

    def candidates(self, r2: jax.Array) -> jax.Array:
        return r2 <= self.cutoff * self.cutoff


__all__ = ["CutoffCollider"]
