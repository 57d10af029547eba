"""
Velocity Verlet rollouts driven by the kernel: the total energy fluctuation
must scale with dt^2 when forces are the exact gradient of the energy.
"""

import jax.numpy as jnp
import numpy as np

from jaxvdw import VdwForce

EXPONENT_TOLERANCE = 0.3


def make_grid_system(n_per_axis=2, spacing=1.0):
    axes = [np.arange(n_per_axis) * spacing for _ in range(3)]
    coords = np.stack(np.meshgrid(*axes, indexing="ij"), axis=-1).reshape(-1, 3)
    n = coords.shape[0]
    return dict(
        num_particles=n,
        positions=coords,
        reduction_partner=np.arange(n),
        combining_class=np.zeros(n, dtype=int),
        sigmas=np.ones(n),
        epsilons=np.ones(n),
        reductions=np.zeros(n),
        exclusions=[[] for _ in range(n)],
    )


def assign_velocities(n, scale=0.1, seed=1234):
    rng = np.random.default_rng(seed)
    vel = rng.normal(size=(n, 3)) * scale
    return vel - vel.mean(axis=0)


def rollout(force, system, vel, dt, n_steps):
    pos = np.array(system["positions"], dtype=float)
    n = system["num_particles"]

    def energy_and_force(p):
        args = dict(system, positions=jnp.asarray(p))
        e, f = force.calculate_force_and_energy(**args, forces=jnp.zeros((n, 3)))
        return float(e), np.asarray(f)

    pe, f = energy_and_force(pos)
    totals = []
    for _ in range(n_steps):
        vel = vel + 0.5 * dt * f
        pos = pos + dt * vel
        pe, f = energy_and_force(pos)
        vel = vel + 0.5 * dt * f
        totals.append(pe + 0.5 * np.sum(vel**2))
    return np.array(totals)


def test_verlet_energy_fluctuation_scales_with_dt_squared():
    force = VdwForce.create("hal")
    system = make_grid_system()
    vel0 = assign_velocities(system["num_particles"])

    total_time = 0.4
    dts = np.array([0.002, 0.004, 0.008])
    fluctuation = np.zeros_like(dts)
    for k, dt in enumerate(dts):
        totals = rollout(force, system, vel0.copy(), dt, int(round(total_time / dt)))
        assert np.all(np.isfinite(totals))
        fluctuation[k] = np.std(totals) / np.abs(np.mean(totals))

    exponent = np.polyfit(np.log10(dts), np.log10(fluctuation), deg=1)[0]
    assert np.abs(exponent - 2.0) < EXPONENT_TOLERANCE
