import logging
from typing import Dict, Hashable, Iterable, Set

from .models import Instructor, ScheduleConfig

logger = logging.getLogger(__name__)


class OccupancyRegistry:
    """Occupied slot indices per (resource, day) for one resource class."""

    def __init__(self, config: ScheduleConfig):
        self.config = config
        self._occupied: Dict[Hashable, Dict[str, Set[int]]] = {}
        self._breaks = set(config.break_slots)

    def is_free(self, resource_id: Hashable, day: str, slot: int, duration: int) -> bool:
        """True iff every slot in [slot, slot + duration) is a teaching slot
        within the day and not yet occupied by this resource."""
        taken = self._occupied.get(resource_id, {}).get(day, ())
        for s in range(slot, slot + duration):
            if s < 1 or s > self.config.slots_per_day:
                return False
            if s in self._breaks or s in taken:
                return False
        return True

    def reserve(self, resource_id: Hashable, day: str, slot: int, duration: int) -> None:
        """Mark [slot, slot + duration) occupied.

        No validation happens here: callers check is_free first. Reserving an
        already occupied or out-of-range slot silently records it.
        """
        day_slots = self._occupied.setdefault(resource_id, {}).setdefault(day, set())
        day_slots.update(range(slot, slot + duration))


class AvailabilityTracker:
    """Instructor, room and section registries for a single generation run.

    There is no release operation; placements are never revisited.
    """

    def __init__(self, config: ScheduleConfig):
        self.config = config
        self.instructors = OccupancyRegistry(config)
        self.rooms = OccupancyRegistry(config)
        self.sections = OccupancyRegistry(config)

    def block_unavailable(self, instructors: Iterable[Instructor]) -> int:
        """Pre-reserve each instructor's "day-slot" unavailability entries."""
        blocked = 0
        for inst in instructors:
            for entry in inst.unavailable_slots:
                day, sep, slot = str(entry).rpartition("-")
                if not sep or not day or not slot.strip().isdigit():
                    logger.warning("Ignoring malformed unavailable slot %r for %s", entry, inst.id)
                    continue
                self.instructors.reserve(inst.id, day.strip(), int(slot), 1)
                blocked += 1
        return blocked

    def is_free(self, instructor_id: str, section_key: Hashable, day: str, slot: int, duration: int) -> bool:
        return (self.instructors.is_free(instructor_id, day, slot, duration)
                and self.sections.is_free(section_key, day, slot, duration))

    def reserve(self, instructor_id: str, room_id: str, section_key: Hashable,
                day: str, slot: int, duration: int) -> None:
        self.instructors.reserve(instructor_id, day, slot, duration)
        self.rooms.reserve(room_id, day, slot, duration)
        self.sections.reserve(section_key, day, slot, duration)
