"""Pairwise particle collision solvers."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from operator import attrgetter
from typing import Sequence

from verletkit.particle import Particle


def _separate(a: Particle, b: Particle, dx: float, dy: float, dz: float, dist_sq: float) -> None:
    """Push a and b apart along (dx, dy, dz) = a - b if they overlap."""
    rest = a.radius + b.radius
    if dist_sq > rest * rest:
        return
    dist = 1.0 if dist_sq < 1 else math.sqrt(dist_sq)
    if a.active and b.active:
        move = (dist - rest) / (dist * (a.inv_mass + b.inv_mass))
        wa = move * a.inv_mass
        a.x -= dx * wa
        a.y -= dy * wa
        a.z -= dz * wa
        wb = move * b.inv_mass
        b.x += dx * wb
        b.y += dy * wb
        b.z += dz * wb
    else:
        move = (dist - rest) / dist
        if a.active:
            a.x -= dx * move
            a.y -= dy * move
            a.z -= dz * move
        else:
            b.x += dx * move
            b.y += dy * move
            b.z += dz * move


class CollisionSolver(ABC):
    """Resolves overlaps between particles treated as spheres."""

    @abstractmethod
    def solve(self, particles: Sequence[Particle], iterations: int) -> None:
        """Relax overlaps in place over the given number of iterations."""


class SimpleCollisionSolver(CollisionSolver):
    """Checks every pair of particles in three dimensions."""

    def solve(self, particles: Sequence[Particle], iterations: int) -> None:
        for _ in range(iterations):
            for i, a in enumerate(particles):
                for b in particles[:i]:
                    if not a.active and not b.active:
                        continue
                    dx = a.x - b.x
                    dy = a.y - b.y
                    dz = a.z - b.z
                    _separate(a, b, dx, dy, dz, dx * dx + dy * dy + dz * dz)


class SortingCollisionSolver(CollisionSolver):
    """Sweeps along x after sorting; resolves overlaps in the x-y plane only.

    The particle list is sorted by x in place.
    """

    def solve(self, particles: list[Particle], iterations: int) -> None:
        if len(particles) < 2:
            return
        max_dist = max(int(p.radius) for p in particles) * 2
        particles.sort(key=attrgetter("x"))
        for _ in range(iterations):
            for i, a in enumerate(particles):
                for b in reversed(particles[:i]):
                    dx = a.x - b.x
                    if abs(dx) > max_dist:
                        break
                    if not a.active and not b.active:
                        continue
                    dy = a.y - b.y
                    _separate(a, b, dx, dy, 0.0, dx * dx + dy * dy)