"""Verlet particle physics with constraints and collisions, a polling update thread, and STL model reading and writing."""

__version__ = "0.1.0"

__all__ = [
    "particle",
    "collision",
    "worker",
    "constraints",
    "world",
    "stl_model",
    "stl_io",
    "stl",
]