"""Crew roster and cleanup log."""

from shoresquad.crew.manager import CrewManager
from shoresquad.crew.models import Cleanup, Crew, CrewMember, CrewStats

__all__ = ["CrewManager", "Crew", "CrewMember", "Cleanup", "CrewStats"]
