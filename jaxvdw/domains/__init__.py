# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Geometry of the simulation cell: how displacement vectors are formed."""

from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional

from ..errors import InvalidConfiguration
from ..factory import Factory

try:  # Python 3.11+
    from typing import Self
except ImportError:  # pragma: no cover - fallback for older Python
    from typing_extensions import Self  # type: ignore


@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class Domain(Factory, ABC):
    """
    Displacement rule used by the pair loop instead of raw coordinate subtraction.

    This is the kernel's only contract with the periodic geometry: given two
    positions, return the vector between them. Cell wrapping, box changes and
    anything else about the box belong to the caller.

    Example
    -------
    >>> @Domain.register("my_domain")
    >>> @jax.tree_util.register_dataclass
    >>> @dataclass(slots=True, frozen=True)
    >>> class MyDomain(Domain):
            ...
    """

    box_size: jax.Array
    """Edge lengths of the orthorhombic cell, shape ``(3,)``."""

    periodic: ClassVar[bool] = False

    @classmethod
    def Create(cls, box_size: Optional[jax.Array] = None) -> Self:
        """
        Build the domain, validating ``box_size`` when one is given.

        Raises
        ------
        InvalidConfiguration
            If ``box_size`` is not three positive finite lengths.
        """
        if box_size is None:
            return cls(box_size=jnp.ones(3, dtype=float))
        box = np.asarray(box_size, dtype=float)
        if box.shape != (3,) or not np.all(np.isfinite(box)) or np.any(box <= 0):
            raise InvalidConfiguration(
                f"box_size must be three positive lengths, got {box_size!r}"
            )
        return cls(box_size=jnp.asarray(box))

    @abstractmethod
    def displacement(self, ri: jax.Array, rj: jax.Array) -> jax.Array:
        r"""
        Vector :math:`r_{ij} = r_i - r_j` adjusted for the boundary conditions.
        Broadcasts over leading dimensions.
        """
        raise NotImplementedError


from .free import FreeDomain  # noqa: E402
from .periodic import PeriodicDomain  # noqa: E402

__all__ = ["Domain", "FreeDomain", "PeriodicDomain"]
