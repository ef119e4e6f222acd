"""A world that steps particles, relaxes constraints and resolves collisions."""

from __future__ import annotations

from typing import Iterator, Optional

from verletkit.collision import CollisionSolver, SortingCollisionSolver
from verletkit.constraints import Constraint
from verletkit.particle import Particle, PointLike, Vec3, _to_vec3


class World:
    """Holds particles and constraints and advances them together.

    Each update applies gravity as an impulse, integrates every particle,
    relaxes the constraints (and the world bounds) ``iterations`` times and
    finally lets the collision solver separate overlapping particles.
    """

    def __init__(
        self,
        gravity: PointLike = Vec3(),
        collisions: bool = False,
        iterations: int = 10,
        world_min: PointLike = Vec3(),
        world_max: PointLike = Vec3(1024.0, 768.0, 0.0),
        check_bounds: bool = True,
        gravity_enabled: bool = True,
        collision_solver: Optional[CollisionSolver] = None,
    ) -> None:
        self.gravity = gravity
        self.collisions = collisions
        self.iterations = iterations
        self.world_min = _to_vec3(world_min)
        self.world_max = _to_vec3(world_max)
        self.check_bounds = check_bounds
        self.gravity_enabled = gravity_enabled
        self.collision_solver = (
            collision_solver if collision_solver is not None else SortingCollisionSolver()
        )
        self._particles: list[Particle] = []
        self._constraints: list[Constraint] = []

    def __repr__(self) -> str:
        return (
            f"World(particles={len(self._particles)}, "
            f"constraints={len(self._constraints)}, iterations={self._iterations})"
        )

    @property
    def gravity(self) -> Vec3:
        return self._gravity

    @gravity.setter
    def gravity(self, value: PointLike) -> None:
        self._gravity = _to_vec3(value)

    @property
    def iterations(self) -> int:
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        value = int(value)
        if value < 0:
            raise ValueError("iterations must not be negative")
        self._iterations = value

    @property
    def particles(self) -> list[Particle]:
        """The live particle list, in solver order."""
        return self._particles

    @property
    def constraints(self) -> list[Constraint]:
        """The live constraint list."""
        return self._constraints

    @property
    def particle_count(self) -> int:
        return len(self._particles)

    @property
    def constraint_count(self) -> int:
        return len(self._constraints)

    def update(self, time_step: float = 1.0) -> None:
        """Advance the simulation by one step."""
        if self.gravity_enabled:
            for particle in self._particles:
                particle.apply_impulse(self._gravity)
        for particle in self._particles:
            particle.update(time_step)
        for _ in range(self._iterations):
            for constraint in self._constraints:
                constraint.update()
            if self.check_bounds:
                self._constrain_to_bounds()
        if self.collisions:
            self.collision_solver.solve(self._particles, self._iterations)

    def _constrain_to_bounds(self) -> None:
        lo, hi = self.world_min, self.world_max
        for p in self._particles:
            r = p.radius
            p.x = max(lo.x + r, min(hi.x - r, p.x))
            p.y = max(lo.y + r, min(hi.y - r, p.y))
            p.z = max(lo.z + r, min(hi.z - r, p.z))

    def add_particle(self, particle: Particle, collisions: Optional[bool] = None) -> Particle:
        """Add a particle; its collision flag defaults to the world's."""
        self._particles.append(particle)
        particle.collide = self.collisions if collisions is None else bool(collisions)
        return particle

    def add_constraint(self, constraint: Constraint) -> Constraint:
        self._constraints.append(constraint)
        return constraint

    def remove_particle(self, particle: Particle) -> None:
        """Remove the particle if present; constraints referring to it stay."""
        for i, p in enumerate(self._particles):
            if p is particle:
                del self._particles[i]
                return

    def remove_constraint(self, constraint: Constraint) -> None:
        """Remove the constraint if present."""
        for i, c in enumerate(self._constraints):
            if c is constraint:
                del self._constraints[i]
                return

    def has_particle(self, particle: Particle) -> bool:
        return any(p is particle for p in self._particles)

    def has_constraint(self, constraint: Constraint) -> bool:
        return any(c is constraint for c in self._constraints)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Particle):
            return self.has_particle(item)
        if isinstance(item, Constraint):
            return self.has_constraint(item)
        return False

    def _constraints_with(self, particle: Particle) -> Iterator[Constraint]:
        return (c for c in self._constraints if c.involves(particle))

    def remove_constraints_with_particle(self, particle: Particle) -> None:
        """Remove every constraint that has the particle at either end."""
        self._constraints[:] = [c for c in self._constraints if not c.involves(particle)]

    def has_constraints_with_particle(self, particle: Particle) -> bool:
        return any(True for _ in self._constraints_with(particle))

    def constraint_with_particle(self, particle: Particle) -> Optional[Constraint]:
        """The first constraint that involves the particle, or None."""
        return next(self._constraints_with(particle), None)

    def nearest_particle(self, point: PointLike) -> Optional[Particle]:
        """The particle closest to point in the x-y plane, or None if empty."""
        if not self._particles:
            return None
        target = _to_vec3(point)
        return min(
            self._particles,
            key=lambda p: (p.x - target.x) ** 2 + (p.y - target.y) ** 2,
        )

    def particle_under_point(self, point: PointLike) -> Optional[Particle]:
        """The first particle whose sphere contains point, or None."""
        target = _to_vec3(point)
        return next((p for p in self._particles if p.contains_point(target)), None)

    def clear_particles(self) -> None:
        self._particles.clear()

    def clear_constraints(self) -> None:
        self._constraints.clear()

    def clear(self) -> None:
        self.clear_particles()
        self.clear_constraints()