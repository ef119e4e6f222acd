"""Verlet-integrated point particles and a small 3D vector type."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

PointLike = Union["Vec3", Sequence[float]]


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: PointLike) -> Vec3:
        o = _to_vec3(other)
        return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)

    __radd__ = __add__

    def __sub__(self, other: PointLike) -> Vec3:
        o = _to_vec3(other)
        return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)

    def __rsub__(self, other: PointLike) -> Vec3:
        return _to_vec3(other) - self

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


def _to_vec3(value: PointLike) -> Vec3:
    if isinstance(value, Vec3):
        return value
    return Vec3(*(float(c) for c in value))


class Particle:
    """A point mass moved by position-based Verlet integration."""

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        radius: float = 10.0,
        mass: float = 1.0,
        drag: float = 0.8,
    ) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self._old = Vec3(self.x, self.y, self.z)
        self._accel = Vec3()
        self.radius = float(radius)
        self.drag = float(drag)
        self.mass = mass
        self.active = True
        self.collide = False

    def __repr__(self) -> str:
        return (
            f"Particle(x={self.x!r}, y={self.y!r}, z={self.z!r}, "
            f"radius={self.radius!r}, mass={self.mass!r}, drag={self.drag!r})"
        )

    @property
    def mass(self) -> float:
        return self._mass

    @mass.setter
    def mass(self, value: float) -> None:
        if value == 0:
            raise ValueError("mass must be non-zero")
        self._mass = float(value)
        self._inv_mass = 1.0 / self._mass

    @property
    def inv_mass(self) -> float:
        return self._inv_mass

    @property
    def position(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    @position.setter
    def position(self, value: PointLike) -> None:
        """Place the particle without touching its previous position."""
        self.x, self.y, self.z = _to_vec3(value)

    @property
    def old_position(self) -> Vec3:
        return self._old

    @property
    def acceleration(self) -> Vec3:
        return self._accel

    @property
    def velocity(self) -> Vec3:
        """Planar velocity; the z component is always reported as zero."""
        return Vec3(self.x - self._old.x, self.y - self._old.y, 0.0)

    @velocity.setter
    def velocity(self, value: PointLike) -> None:
        v = _to_vec3(value)
        self._old = Vec3(self.x - v.x, self.y - v.y, self.z - v.z)

    def update(self, time_step: float = 1.0) -> None:
        """Advance one Verlet step, consuming the accumulated force."""
        if not self.active:
            return
        previous = self.position
        accel = self._accel * self._inv_mass
        dt2 = time_step * time_step
        self.x += (self.x - self._old.x) * self.drag + accel.x * dt2
        self.y += (self.y - self._old.y) * self.drag + accel.y * dt2
        self.z += (self.z - self._old.z) * self.drag + accel.z * dt2
        self._accel = Vec3()
        self._old = previous

    def apply_force(self, force: PointLike) -> None:
        self._accel = self._accel + force

    def apply_impulse(self, impulse: PointLike) -> None:
        """Displace an active particle, which adds to its velocity."""
        if self.active:
            i = _to_vec3(impulse)
            self.x += i.x
            self.y += i.y
            self.z += i.z

    def distance_to(self, other: Particle) -> float:
        return math.sqrt(self.distance_to_squared(other))

    def distance_to_squared(self, other: Particle) -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        dz = other.z - self.z
        return dx * dx + dy * dy + dz * dz

    def contains_point(self, point: PointLike) -> bool:
        p = _to_vec3(point)
        dx = p.x - self.x
        dy = p.y - self.y
        dz = p.z - self.z
        return dx * dx + dy * dy + dz * dz < self.radius * self.radius

    def move_to(self, target: PointLike) -> None:
        """Teleport to target while keeping the current velocity."""
        self.move_by(_to_vec3(target) - self.position)

    def move_by(self, amount: PointLike) -> None:
        """Shift by amount while keeping the current velocity."""
        a = _to_vec3(amount)
        self.x += a.x
        self.y += a.y
        self.z += a.z
        self._old = self._old + a

    def lerp(self, target: PointLike, amount: float) -> None:
        self.move_by((_to_vec3(target) - self.position) * amount)

    def move_towards(self, target: PointLike, strength: float) -> None:
        self.apply_force((_to_vec3(target) - self.position) * strength)

    def apply_attraction_force(self, target: PointLike, amount: float) -> None:
        """Pull towards target; the planar distance used is capped at one."""
        force = _to_vec3(target) - self.position
        dist = min(1.0, math.hypot(force.x, force.y))
        if dist == 0:
            return
        self.apply_force(force / (dist * dist * dist) * amount)

    def apply_repulsion_force(self, target: PointLike, amount: float) -> None:
        """Push away from target with inverse-square falloff in the plane."""
        force = _to_vec3(target) - self.position
        dist = max(1.0, math.hypot(force.x, force.y))
        self.apply_force(force / (dist * dist * dist) * -amount)

    def stop_motion(self) -> None:
        self._accel = Vec3()
        self._old = self.position

    def set_speed(self, speed: float) -> None:
        """Keep the direction of the planar velocity but change its magnitude."""
        vel = self.velocity
        magnitude = vel.length()
        if magnitude == 0:
            raise ValueError("cannot set speed of a particle at rest")
        self.velocity = vel / magnitude * speed