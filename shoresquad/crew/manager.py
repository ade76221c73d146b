"""Crew roster and cleanup log, persisted through the storage manager."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Optional

from pydantic import ValidationError

from shoresquad.core import AppConfig, CrewError
from shoresquad.crew.models import Cleanup, Crew, CrewMember, CrewStats
from shoresquad.storage import StorageManager, wall_clock_ms
from shoresquad.storage.manager import Clock

logger = logging.getLogger(__name__)


class CrewManager:
    """Adds members and cleanups to the stored crew document."""

    def __init__(self, storage: StorageManager, config: AppConfig, clock: Clock = wall_clock_ms) -> None:
        self.storage = storage
        self.config = config
        self.clock = clock

    @property
    def _key(self) -> str:
        return self.config.storage.crew_data

    def get_crew(self) -> Crew:
        """Stored crew, or an empty one if nothing usable is stored."""
        data = self.storage.get(self._key)
        if data is None:
            return Crew()
        try:
            return Crew.model_validate(data)
        except ValidationError:
            logger.warning("Ignoring malformed crew data")
            return Crew()

    def get_stats(self) -> CrewStats:
        return self.get_crew().stats

    def add_member(self, name: str, email: Optional[str] = None) -> CrewMember:
        """Add a member to the crew.

        Args:
            name: Display name
            email: Contact email (optional)

        Returns:
            The new member

        Raises:
            CrewError: If name is blank
        """
        name = name.strip()
        if not name:
            raise CrewError("Member name is required")

        crew = self.get_crew()
        now = self.clock()
        member = CrewMember(
            id=self._next_id(now, (m.id for m in crew.members)),
            name=name,
            email=email or None,
            join_date=self._iso(now),
        )
        crew.members.append(member)
        crew.stats.total_members = len(crew.members)
        self._save(crew)

        logger.info(f"{name} joined the crew")
        return member

    def add_cleanup(
        self,
        location: str,
        date: Optional[str] = None,
        participants: Iterable[str] = (),
        trash_collected: float = 0,
        duration: float = 0,
    ) -> Cleanup:
        """Log a completed cleanup.

        Args:
            location: Where the cleanup happened
            date: ISO date or datetime, normalized to UTC (defaults to now)
            participants: Names of those who took part
            trash_collected: Amount of trash collected
            duration: Duration in minutes

        Returns:
            The logged cleanup

        Raises:
            CrewError: If location is blank, the date is not ISO 8601, or amounts are negative
        """
        if not location.strip():
            raise CrewError("Cleanup location is required")

        crew = self.get_crew()
        now = self.clock()
        try:
            cleanup = Cleanup(
                id=self._next_id(now, (c.id for c in crew.cleanups)),
                date=self._normalize_date(date) if date else self._iso(now),
                location=location.strip(),
                participants=list(participants),
                trash_collected=trash_collected,
                duration=duration,
            )
        except ValidationError as e:
            raise CrewError(f"Invalid cleanup: {e.errors()[0]['msg']}") from e

        crew.cleanups.append(cleanup)
        crew.stats.total_cleanups = len(crew.cleanups)
        crew.stats.total_trash_collected += cleanup.trash_collected
        self._save(crew)

        logger.info(f"Cleanup logged at {cleanup.location}")
        return cleanup

    def _save(self, crew: Crew) -> None:
        if not self.storage.set(self._key, crew.model_dump(mode="json")):
            logger.warning("Crew changes could not be saved")

    @staticmethod
    def _next_id(now: int, existing: Iterable[int]) -> int:
        return max(now, max(existing, default=0) + 1)

    @staticmethod
    def _normalize_date(value: str) -> str:
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise CrewError(f"Invalid cleanup date '{value}': expected an ISO date") from e
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC).isoformat()

    @staticmethod
    def _iso(ms: int) -> str:
        return datetime.fromtimestamp(ms / 1000, UTC).isoformat()
