# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""
Van der Waals force objects and the non-bonded pair loop that drives them.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp
import numpy as np

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import partial
from inspect import isabstract
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Union

from .colliders import Collider, NaiveCollider, NeighborList
from .combining_rules import EpsilonCombiningRule, SigmaCombiningRule
from .domains import Domain
from .errors import DegenerateGeometry, InvalidConfiguration, ShapeMismatch
from .exclusions import Exclusions
from .factory import Factory
from .kernel import buffered_14_7
from .methods import NonbondedMethod
from .reduction import ReductionSite

try:  # Python 3.11+
    from typing import Self
except ImportError:  # pragma: no cover - fallback for older Python
    from typing_extensions import Self  # type: ignore

logger = logging.getLogger(__name__)


def _check_length(name: str, array: Any, n: int, trailing: Tuple[int, ...] = ()) -> None:
    shape = np.shape(array)
    expected = (n, *trailing)
    if shape != expected:
        raise ShapeMismatch(
            f"{name} has shape {shape}, expected {expected} for {n} particles"
        )


@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class VdwForce(Factory, ABC):
    r"""
    Base of the van der Waals force objects.

    A force object fixes the combining rules, the nonbonded method and the
    geometry once; afterwards it only evaluates. Subclasses supply the pair
    functional form through :meth:`pair_interaction`; the pair loop, the
    reduced sites and the force bookkeeping live here.

    For every unordered pair :math:`i < j` that is neither excluded nor
    rejected by the collider:

    1. resolve the effective sites :math:`s_i` and :math:`s_j`;
    2. combine :math:`\sigma_{ij}` and :math:`\epsilon_{ij}`;
    3. evaluate the pair energy and the force :math:`F` on :math:`s_i`;
    4. hand :math:`F` to the particles behind :math:`s_i` and :math:`-F` to
       those behind :math:`s_j`.

    Example
    -------
    >>> force = jaxvdw.VdwForce.create(
    >>>     "hal",
    >>>     sigma_combining_rule="cubic-mean",
    >>>     epsilon_combining_rule="hhg",
    >>> )
    >>> energy, forces = force.calculate_force_and_energy(
    >>>     n, pos, partner, classes, sigma, epsilon, reduction, exclusions, jnp.zeros((n, 3))
    >>> )
    """

    sigma_rule: SigmaCombiningRule = field(metadata={"static": True})
    """Size combining rule."""

    epsilon_rule: EpsilonCombiningRule = field(metadata={"static": True})
    """Well-depth combining rule."""

    nonbonded_method: NonbondedMethod = field(metadata={"static": True})
    """How pairs are selected, see :class:`~jaxvdw.methods.NonbondedMethod`."""

    domain: Domain
    """Displacement rule, ``free`` or ``periodic``."""

    collider: Collider
    """Candidate pair selection for the configured method."""

    strict: bool = field(default=True, metadata={"static": True})
    """Reject (True) or clamp and log (False) out of range reduction factors and asymmetric exclusions."""

    @classmethod
    def Create(
        cls,
        sigma_combining_rule: str = "arithmetic",
        epsilon_combining_rule: str = "arithmetic",
        nonbonded_method: Union[NonbondedMethod, int, str] = NonbondedMethod.NoCutoff,
        cutoff: Optional[float] = None,
        box_size: Optional[jax.Array] = None,
        collider_type: Optional[str] = None,
        collider_kw: Optional[Dict[str, Any]] = None,
        strict: bool = True,
    ) -> Self:
        """
        Build a force object from its configuration.

        Parameters
        ----------
        sigma_combining_rule : str, default "arithmetic"
            ``arithmetic``, ``geometric`` or ``cubic-mean`` (any case).
        epsilon_combining_rule : str, default "arithmetic"
            ``arithmetic``, ``geometric``, ``harmonic`` or ``hhg`` (any case).
        nonbonded_method : NonbondedMethod, int or str, default NoCutoff
        cutoff : float, optional
            Interaction range. Required by the cutoff methods, rejected by
            ``NoCutoff``.
        box_size : array_like, optional
            Orthorhombic box edges. Required by ``CutoffPeriodic`` and
            rejected otherwise. Every edge must be at least twice the cutoff.
        collider_type : str, optional
            Registered :class:`~jaxvdw.colliders.Collider`. Defaults to
            ``naive`` for ``NoCutoff`` and ``cutoff`` for the cutoff methods.
        collider_kw : Dict[str, Any], optional
            Keyword arguments for the collider. The method's ``cutoff`` is
            passed along unless given here, and must agree with it.
        strict : bool, default True
            Data invariant policy, see :attr:`strict`.

        Raises
        ------
        InvalidConfiguration
            Unknown combining rule, method or collider, or an inconsistent
            cutoff/box/collider.

        Note
        ----
        Called on an abstract class, the ``"hal"`` force is built.
        """
        if isabstract(cls):
            cls = VdwForce._registry["hal"]

        sigma_rule = SigmaCombiningRule.create(sigma_combining_rule)
        epsilon_rule = EpsilonCombiningRule.create(epsilon_combining_rule)
        method = NonbondedMethod.parse(nonbonded_method)
        collider_kw = {} if collider_kw is None else dict(collider_kw)

        if not method.uses_cutoff:
            if cutoff is not None:
                raise InvalidConfiguration("NoCutoff does not take a cutoff")
            collider = Collider.create(collider_type or "naive", **collider_kw)
            if not isinstance(collider, NaiveCollider):
                raise InvalidConfiguration(
                    f"NoCutoff evaluates every pair; collider '{collider.type_name}' "
                    "needs a cutoff method"
                )
        else:
            if cutoff is None:
                raise InvalidConfiguration(f"{method.name} requires a cutoff")
            collider_kw.setdefault("cutoff", cutoff)
            collider = Collider.create(collider_type or "cutoff", **collider_kw)
            if getattr(collider, "cutoff", None) != float(cutoff):
                raise InvalidConfiguration(
                    f"Collider '{collider.type_name}' cutoff "
                    f"{getattr(collider, 'cutoff', None)} disagrees with "
                    f"{method.name} cutoff {cutoff}"
                )

        if method.periodic:
            if box_size is None:
                raise InvalidConfiguration("CutoffPeriodic requires box_size")
            domain = Domain.create("periodic", box_size=box_size)
            if float(jnp.min(domain.box_size)) < 2.0 * collider.cutoff:
                raise InvalidConfiguration(
                    f"cutoff {collider.cutoff} exceeds half the smallest box edge "
                    f"{float(jnp.min(domain.box_size))}"
                )
        else:
            if box_size is not None:
                raise InvalidConfiguration(
                    f"box_size is only used by CutoffPeriodic, not {method.name}"
                )
            domain = Domain.create("free")

        logger.debug(
            "Configured %s: sigma rule %s, epsilon rule %s, method %s, cutoff %s",
            cls.__name__,
            sigma_rule.type_name,
            epsilon_rule.type_name,
            method.name,
            cutoff,
        )
        return cls(
            sigma_rule=sigma_rule,
            epsilon_rule=epsilon_rule,
            nonbonded_method=method,
            domain=domain,
            collider=collider,
            strict=bool(strict),
        )

    @property
    def sigma_combining_rule(self) -> str:
        return self.sigma_rule.type_name

    @property
    def epsilon_combining_rule(self) -> str:
        return self.epsilon_rule.type_name

    @property
    def cutoff(self) -> Optional[float]:
        return getattr(self.collider, "cutoff", None)

    @staticmethod
    @abstractmethod
    def pair_interaction(
        sigma: jax.Array, epsilon: jax.Array, delta: jax.Array, mask: jax.Array
    ) -> Tuple[jax.Array, jax.Array]:
        """
        Pair energies and the forces on the first site.

        ``delta`` is :math:`s_j - s_i` with shape ``(N, N, 3)``; entries
        outside ``mask`` must come back as exact zeros.
        """
        raise NotImplementedError

    def calculate_force_and_energy(
        self,
        num_particles: int,
        positions: jax.Array,
        reduction_partner: jax.Array,
        combining_class: jax.Array,
        sigmas: jax.Array,
        epsilons: jax.Array,
        reductions: jax.Array,
        exclusions: Optional[Sequence[Iterable[int]]],
        forces: jax.Array,
        *,
        neighbors: Optional[Sequence[Iterable[int]]] = None,
    ) -> Tuple[jax.Array, jax.Array]:
        """
        Total van der Waals energy and the updated force buffer.

        Parameters
        ----------
        num_particles : int
            Number of particles ``N``.
        positions : array_like
            ``(N, 3)`` coordinates.
        reduction_partner : array_like
            ``(N,)`` reduction partner of each particle, itself for none.
        combining_class : array_like
            ``(N,)`` class index of each particle. Checked for shape only; the
            combining rules act on the per-particle values.
        sigmas, epsilons, reductions : array_like
            ``(N,)`` size, well depth and reduction factor of each particle.
        exclusions : Sequence[Iterable[int]] or None
            Excluded partners of each particle. ``None`` excludes nothing.
        forces : array_like
            ``(N, 3)`` accumulated forces. The result is added to it.
        neighbors : Sequence[Iterable[int]], optional
            Candidate partners from an external neighbour search. Only valid
            with the cutoff methods; the cutoff still applies.

        Returns
        -------
        Tuple[jax.Array, jax.Array]
            Scalar energy and ``forces`` plus this term's contribution.

        Raises
        ------
        ShapeMismatch
            Array lengths disagree with ``num_particles``.
        DataInvariantViolation
            Bad partner, exclusion or neighbour index, or (strict mode) a
            reduction factor outside ``[0, 1]`` or asymmetric exclusions.
        DegenerateGeometry
            Two interacting sites coincide.
        InvalidConfiguration
            ``neighbors`` given with ``NoCutoff``.
        """
        n = int(num_particles)
        if n < 0:
            raise ShapeMismatch(f"num_particles must be non-negative, got {n}")
        _check_length("positions", positions, n, (3,))
        _check_length("reduction_partner", reduction_partner, n)
        _check_length("combining_class", combining_class, n)
        _check_length("sigmas", sigmas, n)
        _check_length("epsilons", epsilons, n)
        _check_length("reductions", reductions, n)
        _check_length("forces", forces, n, (3,))
        if exclusions is not None and len(exclusions) != n:
            raise ShapeMismatch(
                f"exclusions has {len(exclusions)} entries, expected {n}"
            )
        if neighbors is not None:
            if not self.nonbonded_method.uses_cutoff:
                raise InvalidConfiguration(
                    "Neighbour lists are only used by the cutoff methods"
                )
            if len(neighbors) != n:
                raise ShapeMismatch(
                    f"neighbors has {len(neighbors)} entries, expected {n}"
                )
        elif isinstance(self.collider, NeighborList) and self.collider.N != n:
            raise ShapeMismatch(
                f"Configured neighbour list covers {self.collider.N} particles, expected {n}"
            )

        forces = jnp.asarray(forces)
        if n == 0:
            return jnp.zeros((), dtype=forces.dtype), forces

        sites = ReductionSite.Create(reduction_partner, reductions, strict=self.strict)
        excluded = (
            Exclusions.none(n)
            if exclusions is None
            else Exclusions.from_lists(exclusions, n, strict=self.strict)
        )
        collider = (
            self.collider
            if neighbors is None
            else Collider.create("neighborlist", neighbors=neighbors, cutoff=self.cutoff)
        )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Evaluating %d particles (%d reduced sites, %d excluded pairs) with %s/%s, %s",
                n,
                int(jnp.sum(sites.reduced)),
                excluded.count,
                self.sigma_combining_rule,
                self.epsilon_combining_rule,
                self.nonbonded_method.name,
            )

        energy, forces_out, degenerate = VdwForce._evaluate(
            self,
            collider,
            sites,
            excluded.pair_mask,
            jnp.asarray(positions, dtype=float),
            jnp.asarray(sigmas, dtype=float),
            jnp.asarray(epsilons, dtype=float),
            forces,
        )

        coincident = np.argwhere(np.asarray(degenerate))
        if coincident.size:
            i, j = (int(k) for k in coincident[0])
            raise DegenerateGeometry(
                f"Interaction sites of particles {i} and {j} coincide; "
                "exclude the pair or move the particles apart"
            )
        return energy, forces_out

    def compute_energy(
        self,
        num_particles: int,
        positions: jax.Array,
        reduction_partner: jax.Array,
        combining_class: jax.Array,
        sigmas: jax.Array,
        epsilons: jax.Array,
        reductions: jax.Array,
        exclusions: Optional[Sequence[Iterable[int]]],
        *,
        neighbors: Optional[Sequence[Iterable[int]]] = None,
    ) -> jax.Array:
        """Energy only; same arguments as :meth:`calculate_force_and_energy` without ``forces``."""
        energy, _ = self.calculate_force_and_energy(
            num_particles,
            positions,
            reduction_partner,
            combining_class,
            sigmas,
            epsilons,
            reductions,
            exclusions,
            jnp.zeros((int(num_particles), 3), dtype=float),
            neighbors=neighbors,
        )
        return energy

    @staticmethod
    @jax.jit
    @partial(jax.named_call, name="VdwForce._evaluate")
    def _evaluate(
        force: "VdwForce",
        collider: Collider,
        sites: ReductionSite,
        excluded: jax.Array,
        positions: jax.Array,
        sigmas: jax.Array,
        epsilons: jax.Array,
        forces: jax.Array,
    ) -> Tuple[jax.Array, jax.Array, jax.Array]:
        s = sites.resolve(positions)
        n = s.shape[0]

        # delta[i, j] = s_j - s_i
        delta = force.domain.displacement(s[None, :, :], s[:, None, :])
        r2 = jnp.sum(delta * delta, axis=-1)

        upper = jnp.triu(jnp.ones((n, n), dtype=bool), k=1)
        mask = upper & ~excluded & collider.candidates(r2)

        sigma = force.sigma_rule.combine(sigmas[:, None], sigmas[None, :])
        epsilon = force.epsilon_rule.combine(epsilons[:, None], epsilons[None, :])

        energy, f = force.pair_interaction(sigma, epsilon, delta, mask)

        site_forces = f.sum(axis=1) - f.sum(axis=0)
        forces = sites.redistribute(site_forces.astype(forces.dtype), forces)
        return jnp.sum(energy), forces, mask & (r2 == 0)


@VdwForce.register("hal")
@jax.tree_util.register_dataclass
@dataclass(slots=True, frozen=True)
class HalVdwForce(VdwForce):
    """
    AMOEBA van der Waals term: Halgren's buffered 14-7 potential between
    reduced sites.
    """

    @staticmethod
    def pair_interaction(
        sigma: jax.Array, epsilon: jax.Array, delta: jax.Array, mask: jax.Array
    ) -> Tuple[jax.Array, jax.Array]:
        return buffered_14_7(sigma, epsilon, delta, mask)


def calculate_force_and_energy(
    num_particles: int,
    positions: jax.Array,
    reduction_partner: jax.Array,
    combining_class: jax.Array,
    sigmas: jax.Array,
    epsilons: jax.Array,
    reductions: jax.Array,
    exclusions: Optional[Sequence[Iterable[int]]],
    forces: Optional[jax.Array] = None,
    *,
    force_type: str = "hal",
    neighbors: Optional[Sequence[Iterable[int]]] = None,
    **force_kw: Any,
) -> Tuple[jax.Array, jax.Array]:
    """
    One-shot evaluation: build the force object from ``force_kw`` (see
    :meth:`VdwForce.Create`) and evaluate it. ``forces`` defaults to zeros.

    >>> energy, forces = jaxvdw.calculate_force_and_energy(
    >>>     n, pos, partner, classes, sigma, epsilon, reduction, exclusions,
    >>>     sigma_combining_rule="cubic-mean", epsilon_combining_rule="hhg",
    >>> )
    """
    force = VdwForce.create(force_type, **force_kw)
    if forces is None:
        forces = jnp.zeros((int(num_particles), 3), dtype=float)
    return force.calculate_force_and_energy(
        num_particles,
        positions,
        reduction_partner,
        combining_class,
        sigmas,
        epsilons,
        reductions,
        exclusions,
        forces,
        neighbors=neighbors,
    )


__all__ = ["VdwForce", "HalVdwForce", "calculate_force_and_energy"]
