"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Position(BaseModel):
    x: int
    y: int


# --- Map ---

class MapResponse(BaseModel):
    width: int
    height: int
    seed: int
    fingerprint: str
    grid: list[int] = Field(description="RLE of walkable flags: [value, count, value, count, ...] (1=walkable, 0=wall)")


class RoomSchema(BaseModel):
    id: int
    size: int
    center: Position


class RoomsResponse(BaseModel):
    count: int
    largest_room_id: int | None
    rooms: list[RoomSchema]


# --- Queries ---

class WalkableResponse(BaseModel):
    x: int
    y: int
    walkable: bool
    room_id: int | None


class NextStepResponse(BaseModel):
    start: Position
    goal: Position
    step: Position | None = Field(description="Tile adjacent to start, or null when no path exists")


class NearbyResponse(BaseModel):
    center: Position
    radius: int
    entity_ids: list[int]


# --- Session State ---

class AgentSchema(BaseModel):
    id: int
    x: int
    y: int
    state: str
    detection_radius: int


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)


class SessionStateResponse(BaseModel):
    tick: int
    floor_number: int
    seed: int
    player: Position | None
    agents: list[AgentSchema]


class CacheStatsSchema(BaseModel):
    entries: int
    capacity: int
    hits: int
    misses: int
    clears: int
    searches: int


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


class RegenerateRequest(BaseModel):
    seed: int | None = Field(None, description="Seed for the new level; defaults to current seed + 1")


class PlayerMoveRequest(BaseModel):
    x: int
    y: int


# --- Config ---

class LevelConfigResponse(BaseModel):
    seed: int
    width: int
    height: int
    fill_probability: float
    iterations: int
    connect_caves: bool
    spatial_cell_size: int
    path_cache_capacity: int
    path_cache_policy: str
    max_search_nodes: int | None
    agent_count: int
    agent_detection_radius: int
    agent_speed: float
