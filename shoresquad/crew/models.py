"""Crew roster and cleanup log models."""

from pydantic import BaseModel, Field


class CrewMember(BaseModel):
    id: int
    name: str
    email: str | None = None
    join_date: str
    cleanup_count: int = 0
    trash_collected: float = 0


class Cleanup(BaseModel):
    id: int
    date: str
    location: str
    participants: list[str] = Field(default_factory=list)
    trash_collected: float = Field(default=0, ge=0)
    duration: float = Field(default=0, ge=0)  # minutes


class CrewStats(BaseModel):
    total_cleanups: int = 0
    total_trash_collected: float = 0
    total_members: int = 0


class Crew(BaseModel):
    """Everything persisted about a crew."""

    members: list[CrewMember] = Field(default_factory=list)
    cleanups: list[Cleanup] = Field(default_factory=list)
    stats: CrewStats = Field(default_factory=CrewStats)
