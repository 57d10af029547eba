# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
r"""
Buffered 14-7 pair potential (Halgren).

.. math::
    U(\rho) = \epsilon \left(\frac{1 + \delta}{\rho + \delta}\right)^7
              \left(\frac{1 + \gamma}{\rho^7 + \gamma} - 2\right),
    \qquad \rho = d / \sigma

with the buffering constants :data:`HAL_DELTA` and :data:`HAL_GAMMA`.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from functools import partial
from typing import Optional, Tuple

HAL_DELTA = 0.07
HAL_GAMMA = 0.12


@partial(jax.jit, inline=True)
@partial(jax.named_call, name="hal_energy_and_derivative")
def hal_energy_and_derivative(
    d: jax.Array, sigma: jax.Array, epsilon: jax.Array
) -> Tuple[jax.Array, jax.Array]:
    r"""
    Energy and its derivative with respect to the distance.

    .. math::
        \frac{dU}{d\rho} = -7 \epsilon t^7 \left[
            \frac{(1+\gamma) s - 2}{\rho + \delta} + (1+\gamma) \rho^6 s^2
        \right],
        \quad t = \frac{1+\delta}{\rho+\delta},
        \quad s = \frac{1}{\rho^7 + \gamma}

    Parameters
    ----------
    d : jax.Array
        Site-site distance.
    sigma, epsilon : jax.Array
        Combined pair parameters. Broadcast against ``d``.

    Returns
    -------
    Tuple[jax.Array, jax.Array]
        :math:`U` and :math:`dU/dd`.
    """
    rho = d / sigma
    rho2 = rho * rho
    rho6 = rho2 * rho2 * rho2
    rho7 = rho6 * rho

    t = (1.0 + HAL_DELTA) / (rho + HAL_DELTA)
    t2 = t * t
    t7 = t2 * t2 * t2 * t

    s = 1.0 / (rho7 + HAL_GAMMA)
    bracket = (1.0 + HAL_GAMMA) * s - 2.0

    energy = epsilon * t7 * bracket
    de_drho = (
        -7.0
        * epsilon
        * t7
        * (bracket / (rho + HAL_DELTA) + (1.0 + HAL_GAMMA) * rho6 * s * s)
    )
    return energy, de_drho / sigma


@partial(jax.jit, inline=True)
@partial(jax.named_call, name="buffered_14_7")
def buffered_14_7(
    sigma: jax.Array,
    epsilon: jax.Array,
    delta: jax.Array,
    mask: Optional[jax.Array] = None,
) -> Tuple[jax.Array, jax.Array]:
    r"""
    Energy of a site pair and the force on the first site.

    Parameters
    ----------
    sigma, epsilon : jax.Array
        Combined parameters, shape ``(...)``.
    delta : jax.Array
        Separation :math:`s_j - s_i`, shape ``(..., 3)``.
    mask : jax.Array, optional
        Pairs to evaluate, shape ``(...)``. Other entries return exactly zero
        energy and force and never divide by zero.

    Returns
    -------
    Tuple[jax.Array, jax.Array]
        Energy of shape ``(...)`` and force on site :math:`i` of shape
        ``(..., 3)``:

        .. math::
            \mathbf{F}_i = \frac{dU}{dd} \frac{\mathbf{s}_j - \mathbf{s}_i}{d},
            \qquad \mathbf{F}_j = -\mathbf{F}_i
    """
    r2 = jnp.sum(delta * delta, axis=-1)
    active = r2 > 0
    if mask is not None:
        active = active & mask
    active = active & (sigma > 0)

    r2 = jnp.where(active, r2, 1.0)
    sigma = jnp.where(active, sigma, 1.0)
    d = jnp.sqrt(r2)

    energy, de_dd = hal_energy_and_derivative(d, sigma, epsilon)
    energy = jnp.where(active, energy, 0.0)
    coeff = jnp.where(active, de_dd / d, 0.0)
    return energy, coeff[..., None] * delta


__all__ = [
    "HAL_DELTA",
    "HAL_GAMMA",
    "hal_energy_and_derivative",
    "buffered_14_7",
]
