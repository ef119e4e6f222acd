"""Distance constraints between pairs of particles."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import IntEnum

from verletkit.particle import Particle


class ConstraintType(IntEnum):
    """Kind of a constraint, numbered as the solver has always numbered them."""

    SPRING = 0
    FOLLOWER = 1
    INEQUALITY = 2
    MAX_DIST_SPRING = 3
    MIN_DIST_SPRING = 4
    SUPPORT = 5
    COLLISION = 6


def _delta(a: Particle, b: Particle) -> tuple[float, float, float, float]:
    """Return (dx, dy, dz, squared distance) for b - a."""
    dx = b.x - a.x
    dy = b.y - a.y
    dz = b.z - a.z
    return dx, dy, dz, dx * dx + dy * dy + dz * dz


def _clamped_distance(dist_sq: float) -> float:
    return 1.0 if dist_sq < 1 else math.sqrt(dist_sq)


def _relax(
    a: Particle,
    b: Particle,
    dx: float,
    dy: float,
    dz: float,
    dist: float,
    rest: float,
    both_scale: float,
    single_scale: float,
) -> None:
    """Move a and b along (dx, dy, dz) = b - a towards the rest distance."""
    if a.active and b.active:
        move = both_scale * (dist - rest) / (dist * (a.inv_mass + b.inv_mass))
        wa = move * a.inv_mass
        a.x += dx * wa
        a.y += dy * wa
        a.z += dz * wa
        wb = move * b.inv_mass
        b.x -= dx * wb
        b.y -= dy * wb
        b.z -= dz * wb
    else:
        move = single_scale * (dist - rest) / dist
        if a.active:
            a.x += dx * move
            a.y += dy * move
            a.z += dz * move
        else:
            b.x -= dx * move
            b.y -= dy * move
            b.z -= dz * move


class Constraint(ABC):
    """A relation between two particles that is relaxed on every update."""

    type: ConstraintType

    def __init__(self, a: Particle, b: Particle, rest: float, strength: float) -> None:
        self.a = a
        self.b = b
        self.on = True
        self._rest = float(rest)
        self._strength = float(strength)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rest={self._rest!r}, strength={self._strength!r})"

    @property
    def rest(self) -> float:
        return self._rest

    @rest.setter
    def rest(self, value: float) -> None:
        self._rest = float(value)

    @property
    def inv_rest(self) -> float:
        if self._rest == 0:
            return math.inf
        return 1.0 / self._rest

    @property
    def strength(self) -> float:
        return self._strength

    @strength.setter
    def strength(self, value: float) -> None:
        self._strength = float(value)

    @abstractmethod
    def update(self) -> None:
        """Relax the constraint one step."""

    def involves(self, particle: Particle) -> bool:
        """True if the particle is one of the two ends."""
        return self.a is particle or self.b is particle


class Spring(Constraint):
    """Keeps two particles at the rest distance."""

    type = ConstraintType.SPRING

    def __init__(self, a: Particle, b: Particle, rest: float, strength: float = 1.0) -> None:
        super().__init__(a, b, rest, strength)

    def update(self) -> None:
        a, b = self.a, self.b
        if not self.on or (not a.active and not b.active):
            return
        dx, dy, dz, dist_sq = _delta(a, b)
        dist = _clamped_distance(dist_sq)
        _relax(a, b, dx, dy, dz, dist, self._rest, self._strength, self._strength)


class MaxDistSpring(Constraint):
    """A spring that only acts once the particles are farther apart than rest."""

    type = ConstraintType.MAX_DIST_SPRING

    def __init__(self, a: Particle, b: Particle, rest: float, strength: float = 1.0) -> None:
        super().__init__(a, b, rest, strength)

    def update(self) -> None:
        a, b = self.a, self.b
        if not self.on or (not a.active and not b.active):
            return
        dx, dy, dz, dist_sq = _delta(a, b)
        if dist_sq < self._rest * self._rest:
            return
        dist = _clamped_distance(dist_sq)
        _relax(a, b, dx, dy, dz, dist, self._rest, self._strength, self._strength * 0.5)


class MinDistSpring(Constraint):
    """A spring that only acts once the particles are closer than rest."""

    type = ConstraintType.MIN_DIST_SPRING

    def __init__(self, a: Particle, b: Particle, rest: float, strength: float = 1.0) -> None:
        super().__init__(a, b, rest, strength)

    def update(self) -> None:
        a, b = self.a, self.b
        if not self.on or (not a.active and not b.active):
            return
        dx, dy, dz, dist_sq = _delta(a, b)
        if dist_sq > self._rest * self._rest:
            return
        dist = _clamped_distance(dist_sq)
        _relax(a, b, dx, dy, dz, dist, self._rest, self._strength, 0.5)


class FollowerConstraint(Constraint):
    """Draws the follower towards the leader; the leader is never moved."""

    type = ConstraintType.FOLLOWER

    def __init__(self, follower: Particle, leader: Particle, strength: float) -> None:
        super().__init__(follower, leader, 0.0, strength)

    @property
    def follower(self) -> Particle:
        return self.a

    @property
    def leader(self) -> Particle:
        return self.b

    def update(self) -> None:
        a, b = self.a, self.b
        if not self.on or not a.active:
            return
        scale = self._strength * a.inv_mass
        a.x += (b.x - a.x) * scale
        a.y += (b.y - a.y) * scale
        a.z += (b.z - a.z) * scale


class InequalityConstraint(Constraint):
    """Acts only when the distance falls outside [min_rest, max_rest].

    Corrections are applied in the x-y plane only.
    """

    type = ConstraintType.INEQUALITY

    def __init__(
        self, a: Particle, b: Particle, min_rest: float, max_rest: float, strength: float
    ) -> None:
        super().__init__(a, b, min_rest, strength)
        self.min_rest = float(min_rest)
        self.max_rest = float(max_rest)

    def update(self) -> None:
        a, b = self.a, self.b
        if not self.on or (not a.active and not b.active):
            return
        dx, dy, _dz, dist_sq = _delta(a, b)
        min_sq = self.min_rest * self.min_rest
        max_sq = self.max_rest * self.max_rest
        if min_sq < dist_sq < max_sq:
            return
        self._rest = self.min_rest if dist_sq < min_sq else self.max_rest
        dist = _clamped_distance(dist_sq)
        if a.active and b.active:
            # The two-sided correction scales by the move amount itself rather
            # than by the separation vector.
            move = self._strength * (dist - self._rest) / dist * (a.inv_mass + b.inv_mass)
            wa = move * a.inv_mass
            a.x += move * wa
            a.y += move * wa
            wb = move * b.inv_mass
            b.x -= move * wb
            b.y -= move * wb
        else:
            move = self._strength * (dist - self._rest) / dist
            if a.active:
                a.x += move * dx
                a.y += move * dy
            else:
                b.x -= move * dx
                b.y -= move * dy


class CollisionConstraint(Constraint):
    """Separates two particles whose spheres overlap.

    The on flag does not disable it.
    """

    type = ConstraintType.COLLISION

    def __init__(self, a: Particle, b: Particle) -> None:
        super().__init__(a, b, 1.0, 1.0)

    def update(self) -> None:
        a, b = self.a, self.b
        if not a.active and not b.active:
            return
        self._rest = a.radius + b.radius
        dx, dy, dz, dist_sq = _delta(a, b)
        if dist_sq > self._rest * self._rest:
            return
        dist = _clamped_distance(dist_sq)
        _relax(a, b, dx, dy, dz, dist, self._rest, 1.0, 1.0)


class SupportConstraint(Constraint):
    """Two springs meeting at a pivot, braced by a minimum-distance spring.

    The ends may bend about the pivot but not fold closer than support_rest.
    """

    type = ConstraintType.SUPPORT

    def __init__(
        self,
        begin: Particle,
        end: Particle,
        pivot: Particle,
        rest: float,
        support_rest: float,
        strength: float = 1.0,
    ) -> None:
        super().__init__(begin, end, rest, strength)
        self._pivot = pivot
        self._support_rest = float(support_rest)
        self.support = MinDistSpring(begin, end, support_rest, strength)
        self.spring_a = Spring(pivot, begin, rest, strength)
        self.spring_b = Spring(pivot, end, rest, strength)

    @property
    def rest(self) -> float:
        return self._rest

    @rest.setter
    def rest(self, value: float) -> None:
        self._rest = float(value)
        self.spring_a.rest = value
        self.spring_b.rest = value

    @property
    def strength(self) -> float:
        return self._strength

    @strength.setter
    def strength(self, value: float) -> None:
        self._strength = float(value)
        self.support.strength = value

    @property
    def support_rest(self) -> float:
        return self._support_rest

    @support_rest.setter
    def support_rest(self, value: float) -> None:
        self._support_rest = float(value)
        self.support.rest = value

    @property
    def begin(self) -> Particle:
        return self.a

    @begin.setter
    def begin(self, particle: Particle) -> None:
        self.a = particle
        self.support.a = particle
        self.spring_a.b = particle

    @property
    def end(self) -> Particle:
        return self.b

    @end.setter
    def end(self, particle: Particle) -> None:
        self.b = particle
        self.support.b = particle
        self.spring_b.b = particle

    @property
    def pivot(self) -> Particle:
        return self._pivot

    @pivot.setter
    def pivot(self, particle: Particle) -> None:
        self._pivot = particle
        self.spring_a.a = particle
        self.spring_b.a = particle

    def update(self) -> None:
        if not self.on or not (self.a.active or self.b.active):
            return
        self.support.update()
        self.spring_a.update()
        self.spring_b.update()