from typing import Dict, Iterable, Tuple

import networkx as nx

from ..models import LAB, LABORATORY, Placement, ScheduleConfig, TimetableInput


def clashes_ok(G: nx.Graph) -> bool:
    return G.number_of_edges() == 0


def breaks_ok(placements: Iterable[Placement], config: ScheduleConfig) -> bool:
    breaks = set(config.break_slots)
    for p in placements:
        if breaks.intersection(p.slots):
            return False
    return True


def bounds_ok(placements: Iterable[Placement], config: ScheduleConfig) -> bool:
    for p in placements:
        if p.day not in config.working_days:
            return False
        if p.slot < 1 or p.slot + p.duration - 1 > config.slots_per_day:
            return False
    return True


def capacity_ok(placements: Iterable[Placement], document: TimetableInput) -> bool:
    headcount: Dict[Tuple[str, str], int] = {}
    for cohort in document.cohorts:
        for section in cohort.sections:
            headcount[(cohort.id, section.id)] = section.headcount
    for p in placements:
        if p.section_key not in headcount:
            return False
        if p.room.capacity < headcount[p.section_key]:
            return False
    return True


def room_types_ok(placements: Iterable[Placement]) -> bool:
    for p in placements:
        if p.subject.room_type and p.room.type != p.subject.room_type:
            return False
        if p.mode == LAB and p.room.type != LABORATORY:
            return False
    return True
