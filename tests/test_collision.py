import pytest

from verletkit.collision import CollisionSolver, SimpleCollisionSolver, SortingCollisionSolver
from verletkit.particle import Particle

SOLVERS = [SimpleCollisionSolver, SortingCollisionSolver]


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_overlapping_pair_separated_to_contact(solver_cls):
    a = Particle(0, 0, 0, radius=10)
    b = Particle(5, 0, 0, radius=10)
    solver_cls().solve([a, b], 1)
    assert a.distance_to(b) == pytest.approx(a.radius + b.radius)


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_equal_masses_keep_midpoint(solver_cls):
    a = Particle(0, 0, 0, radius=10)
    b = Particle(6, 8, 0, radius=10)
    mid_before = ((a.x + b.x) / 2, (a.y + b.y) / 2)
    solver_cls().solve([a, b], 1)
    assert (a.x + b.x) / 2 == pytest.approx(mid_before[0])
    assert (a.y + b.y) / 2 == pytest.approx(mid_before[1])


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_heavier_particle_moves_less(solver_cls):
    heavy = Particle(0, 0, 0, radius=10, mass=4)
    light = Particle(5, 0, 0, radius=10, mass=1)
    solver_cls().solve([heavy, light], 1)
    heavy_shift = abs(heavy.x - 0)
    light_shift = abs(light.x - 5)
    assert heavy_shift * heavy.mass == pytest.approx(light_shift * light.mass)
    assert heavy_shift < light_shift


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_inactive_particle_stays_put(solver_cls):
    anchor = Particle(0, 0, 0, radius=10)
    anchor.active = False
    mover = Particle(5, 0, 0, radius=10)
    solver_cls().solve([anchor, mover], 1)
    assert (anchor.x, anchor.y, anchor.z) == (0, 0, 0)
    assert anchor.distance_to(mover) == pytest.approx(anchor.radius + mover.radius)


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_two_inactive_particles_untouched(solver_cls):
    a = Particle(0, 0, 0, radius=10)
    b = Particle(5, 0, 0, radius=10)
    a.active = b.active = False
    solver_cls().solve([a, b], 3)
    assert (a.x, b.x) == (0, 5)


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_separated_particles_untouched(solver_cls):
    a = Particle(0, 0, 0, radius=1)
    b = Particle(0, 50, 0, radius=1)
    solver_cls().solve([a, b], 5)
    assert (a.x, a.y, b.x, b.y) == (0, 0, 0, 50)


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_zero_iterations_does_nothing(solver_cls):
    a = Particle(0, 0, 0, radius=10)
    b = Particle(5, 0, 0, radius=10)
    solver_cls().solve([a, b], 0)
    assert (a.x, b.x) == (0, 5)


def test_simple_solver_uses_depth():
    a = Particle(0, 0, 0, radius=10)
    b = Particle(5, 0, 100, radius=10)
    SimpleCollisionSolver().solve([a, b], 1)
    assert (a.x, b.x) == (0, 5)


def test_sorting_solver_ignores_depth():
    a = Particle(0, 0, 0, radius=10)
    b = Particle(5, 0, 100, radius=10)
    SortingCollisionSolver().solve([a, b], 1)
    assert b.x - a.x == pytest.approx(a.radius + b.radius)
    assert (a.z, b.z) == (0, 100)


def test_sorting_solver_sorts_list_by_x():
    particles = [Particle(50, 0, 0, radius=1), Particle(0, 0, 0, radius=1), Particle(100, 0, 0, radius=1)]
    SortingCollisionSolver().solve(particles, 1)
    xs = [p.x for p in particles]
    assert xs == sorted(xs)
    assert sorted(xs) == [0, 50, 100]


def test_sorting_solver_single_particle_noop():
    only = Particle(3, 4, 5)
    particles = [only]
    SortingCollisionSolver().solve(particles, 10)
    assert particles == [only]
    assert (only.x, only.y, only.z) == (3, 4, 5)


def test_base_solver_is_abstract():
    with pytest.raises(TypeError):
        CollisionSolver()