# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Exceptions raised by the van der Waals kernel."""

from __future__ import annotations


class VdwError(Exception):
    """Base class for every error raised by :mod:`jaxvdw`."""


class InvalidConfiguration(VdwError, ValueError):
    """
    Raised while building a force object: unknown combining rule, unsupported
    nonbonded method or an inconsistent cutoff/box description.
    """


class ShapeMismatch(VdwError, ValueError):
    """Raised when the per-particle arrays disagree on the number of particles."""


class DataInvariantViolation(VdwError, ValueError):
    """
    Raised when per-particle data breaks an invariant: reduction factor outside
    ``[0, 1]`` (strict mode), out of range partner or exclusion indices, or
    asymmetric exclusions (strict mode).
    """


class DegenerateGeometry(VdwError, ArithmeticError):
    """Raised when two interacting sites coincide."""


__all__ = [
    "VdwError",
    "InvalidConfiguration",
    "ShapeMismatch",
    "DataInvariantViolation",
    "DegenerateGeometry",
]
