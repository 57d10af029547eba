"""
Introduction
====================================

This example evaluates the AMOEBA van der Waals term for a water dimer with
JaxVdW.
"""

import jax

jax.config.update("jax_enable_x64", True)

import jax.numpy as jnp
import jaxvdw

# %%
# Describe the particles
# ----------------------
# Each water has an oxygen and two hydrogens. The hydrogens interact through a
# site pulled 91% of the way towards their oxygen, so every hydrogen lists its
# oxygen as reduction partner. The oxygens are their own partners.

positions = jnp.array(
    [
        [0.000, 0.000, 0.000],
        [0.0957, 0.000, 0.000],
        [-0.024, 0.093, 0.000],
        [0.290, 0.020, 0.010],
        [0.386, 0.020, 0.010],
        [0.266, 0.113, 0.010],
    ]
)
reduction_partner = jnp.array([0, 0, 0, 3, 3, 3])
reductions = jnp.array([0.0, 0.91, 0.91, 0.0, 0.91, 0.91])
sigmas = jnp.array([0.3405, 0.2655, 0.2655] * 2)
epsilons = jnp.array([0.46, 0.056, 0.056] * 2)
classes = jnp.zeros(6, dtype=int)

# %%
# Intramolecular pairs are excluded. Exclusion sets must be symmetric.

exclusions = [[1, 2], [0, 2], [0, 1], [4, 5], [3, 5], [3, 4]]

# %%
# Build the force and evaluate it
# -------------------------------
# The combining rules are chosen by name once, when the force object is built.
# The force buffer is only added to, so start from zeros.

force = jaxvdw.VdwForce.create(
    "hal", sigma_combining_rule="cubic-mean", epsilon_combining_rule="hhg"
)
energy, forces = force.calculate_force_and_energy(
    6,
    positions,
    reduction_partner,
    classes,
    sigmas,
    epsilons,
    reductions,
    exclusions,
    jnp.zeros((6, 3)),
)
print(f"energy: {float(energy):.6f}")
print(f"net force: {forces.sum(axis=0)}")

# %%
# Cutoffs
# -------
# With a periodic box the nearest image of every particle is used.

periodic = jaxvdw.VdwForce.create(
    "hal",
    sigma_combining_rule="cubic-mean",
    epsilon_combining_rule="hhg",
    nonbonded_method="CutoffPeriodic",
    cutoff=0.9,
    box_size=[2.0, 2.0, 2.0],
)
energy, _ = periodic.calculate_force_and_energy(
    6,
    positions,
    reduction_partner,
    classes,
    sigmas,
    epsilons,
    reductions,
    exclusions,
    jnp.zeros((6, 3)),
)
print(f"periodic energy: {float(energy):.6f}")
