# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""
Reduced interaction sites.

Some particles (typically hydrogens) interact through a virtual site placed
on the line to a partner particle. The force felt by the site is handed back
to the two real particles in proportion to the interpolation weights.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp
import numpy as np

from dataclasses import dataclass
from functools import partial

from .errors import DataInvariantViolation

try:  # Python 3.11+
    from typing import Self
except ImportError:  # pragma: no cover - fallback for older Python
    from typing_extensions import Self  # type: ignore

logger = logging.getLogger(__name__)


@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class ReductionSite:
    r"""
    Virtual interaction sites of every particle.

    Site :math:`k` sits at

    .. math::
        s_k = r_k \, x_{iv_k} + (1 - r_k) \, x_k

    and is exactly :math:`x_k` when :math:`iv_k = k`. A force :math:`F` on the
    site is split as :math:`(1 - r_k) F` on particle :math:`k` and
    :math:`r_k F` on particle :math:`iv_k`.
    """

    particle: jax.Array
    """Index of the real particle owning the site, shape ``(N,)``."""

    partner: jax.Array
    """Index of the reduction partner, shape ``(N,)``. Equal to ``particle`` for no reduction."""

    factor: jax.Array
    """Reduction factor in ``[0, 1]``, shape ``(N,)``."""

    @classmethod
    def Create(
        cls,
        partner: jax.Array,
        factor: jax.Array,
        *,
        strict: bool = True,
    ) -> Self:
        """
        Build the sites from per-particle partner indices and factors.

        Parameters
        ----------
        partner : array_like
            Reduction partner of each particle, in ``[0, N)``.
        factor : array_like
            Reduction factor of each particle.
        strict : bool, default True
            Reject factors outside ``[0, 1]``. When False, they are clamped
            into the interval and a warning is logged.

        Raises
        ------
        DataInvariantViolation
            Partner index out of range (always), non-finite factor (always) or
            factor outside ``[0, 1]`` (strict mode only).
        """
        partner = np.asarray(partner)
        factor = np.asarray(factor, dtype=float)
        n = partner.shape[0]

        if not np.issubdtype(partner.dtype, np.integer):
            raise DataInvariantViolation(
                f"Reduction partner indices must be integers, got dtype {partner.dtype}"
            )
        bad = np.flatnonzero((partner < 0) | (partner >= n))
        if bad.size:
            i = int(bad[0])
            raise DataInvariantViolation(
                f"Particle {i} has reduction partner {int(partner[i])} outside [0, {n})"
            )
        if not np.all(np.isfinite(factor)):
            raise DataInvariantViolation("Reduction factors must be finite")

        outside = np.flatnonzero((factor < 0.0) | (factor > 1.0))
        if outside.size:
            i = int(outside[0])
            if strict:
                raise DataInvariantViolation(
                    f"Particle {i} has reduction factor {factor[i]!r} outside [0, 1]"
                )
            logger.warning(
                "Clamping %d reduction factor(s) into [0, 1] (first: particle %d, factor %r)",
                outside.size,
                i,
                float(factor[i]),
            )
            factor = np.clip(factor, 0.0, 1.0)

        return cls(
            particle=jnp.arange(n, dtype=int),
            partner=jnp.asarray(partner, dtype=int),
            factor=jnp.asarray(factor),
        )

    @property
    def N(self) -> int:
        return self.particle.shape[0]

    @property
    def reduced(self) -> jax.Array:
        """Mask of the sites that differ from their particle."""
        return self.partner != self.particle

    @partial(jax.jit, inline=True)
    def resolve(self, positions: jax.Array) -> jax.Array:
        """
        Effective site positions for ``positions`` of shape ``(N, 3)``.

        Sites without a partner are returned bit for bit unchanged.
        """
        r = self.factor[:, None]
        own = positions[self.particle]
        interpolated = r * positions[self.partner] + (1.0 - r) * own
        return jnp.where(self.reduced[:, None], interpolated, own)

    @partial(jax.jit, inline=True)
    def redistribute(self, site_forces: jax.Array, forces: jax.Array) -> jax.Array:
        """
        Add the forces acting on the sites to the real particles.

        Parameters
        ----------
        site_forces : jax.Array
            Force on every site, shape ``(N, 3)``. The sign already encodes
            whether the site was the source or the target of each pair.
        forces : jax.Array
            Accumulated per-particle forces, shape ``(N, 3)``. Only added to.

        Returns
        -------
        jax.Array
            ``forces`` plus the redistributed contribution.
        """
        r = jnp.where(self.reduced, self.factor, 0.0)[:, None]
        forces = forces.at[self.particle].add((1.0 - r) * site_forces)
        return forces.at[self.partner].add(r * site_forces)


__all__ = ["ReductionSite"]
