# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project
"""Treatment of long range van der Waals interactions."""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from .errors import InvalidConfiguration


class NonbondedMethod(IntEnum):
    """
    How pairs are selected for evaluation.

    NoCutoff
        The full set of N^2 interactions is computed exactly. Periodic
        boundaries cannot be used. This is the default.
    CutoffNonPeriodic
        Interactions beyond the cutoff distance are ignored.
    CutoffPeriodic
        Each particle interacts only with the nearest periodic copy of each
        other particle. Interactions beyond the cutoff distance are ignored.
    """

    NoCutoff = 0
    CutoffNonPeriodic = 1
    CutoffPeriodic = 2

    @property
    def uses_cutoff(self) -> bool:
        return self is not NonbondedMethod.NoCutoff

    @property
    def periodic(self) -> bool:
        return self is NonbondedMethod.CutoffPeriodic

    @classmethod
    def parse(cls, method: Union["NonbondedMethod", int, str]) -> "NonbondedMethod":
        """
        Accept an enum member, its integer value or its name (case and
        ``-``/``_`` insensitive, e.g. ``"cutoff-periodic"``).
        """
        if isinstance(method, cls):
            return method
        if isinstance(method, str):
            key = method.replace("-", "").replace("_", "").lower()
            for member in cls:
                if member.name.lower() == key:
                    return member
        elif isinstance(method, int) and not isinstance(method, bool):
            try:
                return cls(method)
            except ValueError:
                pass
        raise InvalidConfiguration(
            f"Unsupported nonbonded method {method!r}. "
            f"Available: {[m.name for m in cls]}"
        )


__all__ = ["NonbondedMethod"]
