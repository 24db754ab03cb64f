"""Core data models and level representation."""

from delve.core.enums import AIState, CachePolicy, Direction, Domain
from delve.core.errors import DelveError, InvalidConfiguration, InvalidPosition
from delve.core.grid import TileGrid
from delve.core.models import Agent, Coord, MoveProposal, manhattan
from delve.core.rooms import Room, RoomIndex

__all__ = [
    "AIState",
    "Agent",
    "CachePolicy",
    "Coord",
    "DelveError",
    "Direction",
    "Domain",
    "InvalidConfiguration",
    "InvalidPosition",
    "MoveProposal",
    "Room",
    "RoomIndex",
    "TileGrid",
    "manhattan",
]
