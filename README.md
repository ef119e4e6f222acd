# verletkit

A small toolkit for interactive simulations and simple 3D models:

- **Verlet particle physics** (`verletkit.particle`, `verletkit.constraints`,
  `verletkit.collision`, `verletkit.world`). It has particles with a position,
  radius, mass and drag. It has constraints: springs, min/max-distance
  springs, followers, and inequality, collision and support constraints. It
  also has collision solvers, and a `World` that steps everything together.
- **A polling update thread** (`verletkit.worker`). `UpdateThread` runs your
  own per-step work in the background. You can run it freely, pause it, or
  step it once and wait for it to finish.
- **STL models** (`verletkit.stl_model`, `verletkit.stl_io`, `verletkit.stl`).
  You can read and write ASCII and binary STL files. You can also scale,
  normalise, shift or centre the facets of a model.

## Installation

```
pip install verletkit
```

To run the tests:

```
pip install "verletkit[test]"
pytest
```

## Physics

```python
from verletkit.constraints import Spring
from verletkit.particle import Particle, Vec3
from verletkit.world import World

world = World(gravity=Vec3(0, 1, 0))

a = Particle(100, 100, 0, radius=10)
b = Particle(160, 100, 0, radius=10)
world.add_particle(a, True)
world.add_particle(b, True)
world.add_constraint(Spring(a, b, a.distance_to(b)))

for _ in range(60):
    world.update(1.0)

print(world.nearest_particle(Vec3(0, 0, 0)))
```

`Particle(x, y, z, radius=10.0, mass=1.0, drag=0.8)` moves by position-based
Verlet integration. Each `update()` carries the particle forward by its
previous motion times `drag`, plus the force it has gathered since the last
step. You can change a particle in these ways:

- `apply_force` adds to the force used in the next step.
- `apply_impulse` displaces the particle, which also changes its velocity.
- `move_to`, `move_by` and `lerp` relocate it and keep its velocity.
- `velocity`, `set_speed` and `stop_motion` control its motion directly.

A particle whose `active` flag is off is not integrated and stays where it is.
Impulses have no effect on it. Constraints and collision solvers move only
active particles.

Each constraint in `verletkit.constraints` links two particles, `a` and `b`,
and has `rest`, `strength` and an `on` flag. Its `type` is a `ConstraintType`.
`involves(particle)` tells whether a particle is at either end.
`SupportConstraint` joins a begin and an end particle to a pivot with two
springs, and a minimum-distance spring braces it.

`World.update(time_step)` does these steps in order:

1. It applies gravity as an impulse.
2. It integrates every particle.
3. It relaxes all constraints `iterations` times. When `check_bounds` is set,
   it also clamps particles inside the box `world_min`–`world_max` on each of
   these passes. The defaults are `(0, 0, 0)` to `(1024, 768, 0)`.
4. When `collisions` is set, it runs the `collision_solver`.

`World` can also do the following:

- Find the nearest particle in the x-y plane with `nearest_particle`.
- Find the particle whose sphere holds a point with `particle_under_point`.
- Find or remove constraints that use a particle with
  `constraint_with_particle`, `has_constraints_with_particle` and
  `remove_constraints_with_particle`.
- Clear particles, constraints or both.

`particle in world` and `constraint in world` also work.

Collisions are solved by a `CollisionSolver`. `SortingCollisionSolver` is the
default. It sorts the particle list by x in place, compares only nearby
neighbours, and resolves overlaps in the x-y plane. `SimpleCollisionSolver`
checks every pair in 3D.

## Background updates

```python
from verletkit.worker import UpdateThread

class Counter(UpdateThread):
    def __init__(self):
        super().__init__()
        self.count = 0

    def update_thread(self):
        self.count += 1

worker = Counter()
worker.start_paused()
worker.update_once()
worker.wait_to_finish()
worker.stop()
```

You can also pass a callable instead of subclassing, as in
`UpdateThread(target=step, interval=0.01)`. The thread checks its run flag
every `interval` seconds. It has these controls:

- `start()` starts the thread and updates continuously.
- `start_paused()` starts the thread but waits until it is asked to update.
- `begin_update()` and `pause_update()` switch continuous updating on and off.
- `update_once()` runs a single step.
- `wait_to_finish()` blocks until no further step is pending.
- `is_updating()` tells whether a step is running right now.
- `stop()` ends the thread.

The object is also a context manager that stops the thread on exit.

## STL models

```python
from verletkit.particle import Vec3
from verletkit.stl import StlExporter, StlImporter

exporter = StlExporter()
exporter.begin_model("triangle")
exporter.add_triangle(Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0), Vec3(0, 0, 1))
exporter.save("triangle.stl")

importer = StlImporter().load("triangle.stl")
importer.center(Vec3(0, 0, 0))
```

`StlExporter` writes binary STL by default. Use `StlExporter(use_ascii=True)`,
or set `use_ascii`, to write text instead.

The importer detects the format from the first bytes of the file. A file that
starts with `solid` is read as ASCII, and anything else as binary. Binary
files carry no model name.

Both classes are `StlModel`s, each a list of `Facet`s with a `name`. A model
can be transformed in these ways:

- `scale(amount)` multiplies every vertex.
- `normalize()` scales the model so its larger x-y extent becomes one.
- `rescale(size)` normalises the model and then scales it to `size`.
- `shift(amount)` moves every vertex.
- `center(position)` moves the vertex centroid to `position`.
- `center_point()` returns that centroid.

At a lower level, `verletkit.stl_io` has `read_ascii`, `write_ascii`,
`read_binary`, `write_binary` and `is_ascii`. These work on strings and bytes
rather than on files. Malformed data raises `StlFormatError`, which is a
`ValueError`.

## What it does not do

verletkit only computes. It draws nothing. There is no rendering of
particles, constraints or meshes, and no window or input handling. Connect
the positions and facets it produces to whatever graphics library you use.