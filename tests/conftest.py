"""
Shared test fixtures for jaxvdw tests.
"""

import os
import sys

import jax

jax.config.update("jax_enable_x64", True)

import jax.numpy as jnp
import numpy as np
import pytest

# Ensure jaxvdw is importable without an editable install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from jaxvdw import VdwForce


def water_cluster(n_molecules=3, seed=0):
    """Small cluster of 3-site molecules with reduced hydrogens.

    Every hydrogen reduces towards its oxygen with factor 0.91 and all
    intramolecular pairs are excluded, like an AMOEBA water box.
    """
    rng = np.random.default_rng(seed)
    oh = 0.0957
    positions = []
    partner = []
    reductions = []
    sigmas = []
    epsilons = []
    exclusions = []
    for m in range(n_molecules):
        o = np.array([0.32 * m, 0.05 * (m % 2), -0.03 * m]) + rng.uniform(-0.02, 0.02, 3)
        h1 = o + oh * np.array([1.0, 0.0, 0.0])
        h2 = o + oh * np.array([-0.24, 0.97, 0.0])
        base = 3 * m
        positions += [o, h1, h2]
        partner += [base, base, base]
        reductions += [0.0, 0.91, 0.91]
        sigmas += [0.3405, 0.2655, 0.2655]
        epsilons += [0.46, 0.056, 0.056]
        group = [base, base + 1, base + 2]
        exclusions += [[k for k in group if k != idx] for idx in group]

    return dict(
        num_particles=3 * n_molecules,
        positions=jnp.asarray(np.array(positions)),
        reduction_partner=jnp.asarray(partner, dtype=int),
        combining_class=jnp.zeros(3 * n_molecules, dtype=int),
        sigmas=jnp.asarray(sigmas),
        epsilons=jnp.asarray(epsilons),
        reductions=jnp.asarray(reductions),
        exclusions=exclusions,
    )


def pair_system(distance=1.0, sigma=1.0, epsilon=1.0):
    """Two bare particles on the x axis."""
    return dict(
        num_particles=2,
        positions=jnp.array([[0.0, 0.0, 0.0], [distance, 0.0, 0.0]]),
        reduction_partner=jnp.array([0, 1]),
        combining_class=jnp.array([0, 0]),
        sigmas=jnp.array([sigma, sigma]),
        epsilons=jnp.array([epsilon, epsilon]),
        reductions=jnp.array([0.0, 0.0]),
        exclusions=[[], []],
    )


def evaluate(force, system, forces=None):
    if forces is None:
        forces = jnp.zeros((system["num_particles"], 3))
    return force.calculate_force_and_energy(
        system["num_particles"],
        system["positions"],
        system["reduction_partner"],
        system["combining_class"],
        system["sigmas"],
        system["epsilons"],
        system["reductions"],
        system["exclusions"],
        forces,
    )


@pytest.fixture
def hal_force():
    """Default configuration: arithmetic/arithmetic, NoCutoff."""
    return VdwForce.create("hal")


@pytest.fixture
def amoeba_force():
    """Combining rules used by the AMOEBA force field."""
    return VdwForce.create(
        "hal", sigma_combining_rule="CUBIC-MEAN", epsilon_combining_rule="HHG"
    )


@pytest.fixture
def cluster():
    return water_cluster()
