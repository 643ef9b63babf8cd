from typing import Iterable, List, Optional

from ..availability import OccupancyRegistry
from ..models import LAB, LABORATORY, Room, SubjectRequirement


def candidate_rooms(rooms: Iterable[Room], subject: SubjectRequirement, mode: str, headcount: int) -> List[Room]:
    """Rooms suitable for one session, in input order."""
    out: List[Room] = []
    for room in rooms:
        if subject.room_type and room.type != subject.room_type:
            continue
        if mode == LAB and room.type != LABORATORY:
            continue
        if room.capacity >= headcount:
            out.append(room)
    return out


def first_free_room(candidates: List[Room], registry: OccupancyRegistry, day: str, slot: int,
                    duration: int) -> Optional[Room]:
    for room in candidates:
        if registry.is_free(room.id, day, slot, duration):
            return room
    return None
