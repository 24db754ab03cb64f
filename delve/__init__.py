"""delve: cave level generation, room indexing, spatial hashing and next-step pathfinding."""

__version__ = "0.1.0"
