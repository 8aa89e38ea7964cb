#!/usr/bin/env python3
"""
Core Physics Engine for Space Sim

Responsibilities
- Compute pairwise Newtonian gravitational forces by direct summation.
- Advance body states with an explicit Euler integrator (velocity first, then position).
- Provide small helpers for diagnostics and scene building (momentum, centre of mass,
  circular orbit velocity).

Units and conventions
- World space positions are in meters [m].
- Velocities are in meters per second [m/s].
- Masses are in kilograms [kg].
- Time steps are in seconds [s]. The default step of 1 s matches the historical
  behaviour where the step size was folded into the update formulas.

Numerical notes
- Euler is first order and drifts; the controller runs thousands of small sub-steps per
  rendered frame to keep the error visually negligible.
- Updates are simultaneous: every force of a step is computed from the positions at the
  start of that step, so the result does not depend on body order.
- Two bodies at exactly the same position give r^2 = 0. This is a known singularity and is
  not guarded: the force magnitude becomes inf, its y component nan (atan2(0, 0) = 0), and
  the non-finite values propagate into the body state. Near misses produce huge forces that
  fling the bodies apart.
- Complexity: O(N^2) per step.
"""

import math
from typing import List, Tuple
from .constants import DEFAULT_DT, G
from .data_models import Body, World
from .vector_utils import vec_add, vec_scale


class NBodyPhysics:
    """
    Direct-summation N-body gravity with an explicit Euler step.

    The force on body i from body j has magnitude
    F = G * m_i * m_j / r^2
    and points along the angle atan2(dy, dx) from i to j.
    """

    def __init__(self, dt: float = DEFAULT_DT):
        """
        Initialize the physics engine.

        Args:
            dt: Time step in seconds applied by each call to step()
        """
        self.dt = float(dt)

    def compute_forces(self, bodies: List[Body], g: float = G) -> List[Tuple[float, float]]:
        """
        Compute the net gravitational force on every body.

        Fixed bodies receive (0, 0) since they are never moved, but they still take part
        as attractors in every other body's sum.

        Args:
            bodies: List of Body objects, read only.
            g: Gravitational constant.

        Returns:
            List of (fx, fy) forces in newtons, same order as the input.
        """
        n = len(bodies)
        forces = [(0.0, 0.0) for _ in range(n)]

        for i in range(n):
            body = bodies[i]
            if body.fixed:
                continue

            fx_total, fy_total = 0.0, 0.0
            xi, yi = body.position

            for j in range(n):
                if i == j:
                    continue

                other = bodies[j]
                dx = other.position[0] - xi
                dy = other.position[1] - yi

                theta = math.atan2(dy, dx)
                r_squared = dx * dx + dy * dy

                force = g * body.mass * other.mass / r_squared if r_squared else math.inf

                fx_total += force * math.cos(theta)
                fy_total += force * math.sin(theta)

            forces[i] = (fx_total, fy_total)

        return forces

    def step(self, world: World) -> None:
        """
        Advance every non-fixed body of the world by one time step (in place).

        v += F / m * dt, then pos += v * dt.
        """
        bodies = world.bodies
        forces = self.compute_forces(bodies, world.g)
        dt = self.dt

        for body, force in zip(bodies, forces):
            if body.fixed:
                continue
            body.velocity = vec_add(body.velocity, vec_scale(force, dt / body.mass))
            body.position = vec_add(body.position, vec_scale(body.velocity, dt))

        world.steps += 1

    def advance(self, world: World, substeps: int) -> None:
        """Run `substeps` consecutive steps."""
        for _ in range(substeps):
            self.step(world)


def total_momentum(bodies: List[Body]) -> Tuple[float, float]:
    """Sum of mass * velocity over all bodies, in kg m/s."""
    px = sum(b.mass * b.velocity[0] for b in bodies)
    py = sum(b.mass * b.velocity[1] for b in bodies)
    return (px, py)


def centre_of_mass(bodies: List[Body]) -> Tuple[float, float]:
    """Mass-weighted mean position. Returns (0, 0) for an empty list."""
    total = sum(b.mass for b in bodies)
    if total <= 0:
        return (0.0, 0.0)
    cx = sum(b.mass * b.position[0] for b in bodies) / total
    cy = sum(b.mass * b.position[1] for b in bodies) / total
    return (cx, cy)


def circular_orbit_velocity(central_mass: float, orbital_radius: float, g: float = G) -> float:
    """
    Calculate the velocity needed for a circular orbit.

    For a circular orbit, the gravitational force provides exactly the
    centripetal force needed. This gives us:
    G * M / r = v^2 / r
    Therefore: v = sqrt(G * M / r)

    Args:
        central_mass: Mass of the central body in kg
        orbital_radius: Orbital radius in meters
        g: Gravitational constant

    Returns:
        Orbital velocity in m/s for a circular orbit
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(g * central_mass / orbital_radius)
