"""Level systems: RNG, floor generation, spatial indexing, spawn placement."""

from delve.systems.floor_generator import FloorGenerator, generate
from delve.systems.rng import DeterministicRNG
from delve.systems.spatial_hash import SpatialHashGrid

__all__ = ["DeterministicRNG", "FloorGenerator", "SpatialHashGrid", "generate"]
