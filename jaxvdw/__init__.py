# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""
JaxVdW module

Buffered 14-7 (AMOEBA) van der Waals energy and forces with reduced
interaction sites, selectable combining rules and exclusions, in JAX.
"""

from __future__ import annotations

from .errors import (
    VdwError,
    InvalidConfiguration,
    ShapeMismatch,
    DataInvariantViolation,
    DegenerateGeometry,
)
from .factory import Factory
from .methods import NonbondedMethod
from .combining_rules import CombiningRule, SigmaCombiningRule, EpsilonCombiningRule
from .reduction import ReductionSite
from .exclusions import Exclusions
from .kernel import HAL_DELTA, HAL_GAMMA, buffered_14_7, hal_energy_and_derivative
from .domains import Domain
from .colliders import Collider
from .force import VdwForce, HalVdwForce, calculate_force_and_energy

__all__ = [
    "VdwError",
    "InvalidConfiguration",
    "ShapeMismatch",
    "DataInvariantViolation",
    "DegenerateGeometry",
    "Factory",
    "NonbondedMethod",
    "CombiningRule",
    "SigmaCombiningRule",
    "EpsilonCombiningRule",
    "ReductionSite",
    "Exclusions",
    "HAL_DELTA",
    "HAL_GAMMA",
    "buffered_14_7",
    "hal_energy_and_derivative",
    "Domain",
    "Collider",
    "VdwForce",
    "HalVdwForce",
    "calculate_force_and_energy",
]
