import logging
from typing import Dict, List, Sequence

import pandas as pd

from ..graph_build import build_clash_graph
from ..models import (
    MEDIUM, OVERLOAD, UNPLACEABLE, UNRESOLVED_REFERENCE,
    Conflict, InstructorTimetable, Placement, RoomUtilization, ScheduleConfig,
    Statistics, TimetableInput, TimetableReport,
)
from .validation import bounds_ok, breaks_ok, capacity_ok, clashes_ok, room_types_ok

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["placement_id", "instructor_id", "room_id", "day", "slot", "duration", "hours"]


def placements_frame(placements: Sequence[Placement], config: ScheduleConfig) -> pd.DataFrame:
    rows = [
        {
            "placement_id": p.id,
            "instructor_id": p.instructor.id,
            "room_id": p.room.id,
            "day": p.day,
            "slot": p.slot,
            "duration": p.duration,
            "hours": p.hours(config),
        }
        for p in placements
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def detect_overloads(placements: Sequence[Placement], document: TimetableInput) -> List[Conflict]:
    """Medium-severity conflict for every instructor-day above the daily cap.

    Runs over committed placements only; it never blocks a placement.
    """
    config = document.config
    df = placements_frame(placements, config)
    daily: Dict[tuple, float] = df.groupby(["instructor_id", "day"])["hours"].sum().to_dict()
    ids_by_key: Dict[tuple, List[str]] = {}
    for p in placements:
        ids_by_key.setdefault((p.instructor.id, p.day), []).append(p.id)

    days = list(config.working_days)
    days += sorted({p.day for p in placements} - set(days))
    conflicts: List[Conflict] = []
    for inst in document.instructors:
        for day in days:
            hours = float(daily.get((inst.id, day), 0.0))
            if hours > inst.max_hours_per_day:
                logger.info("Instructor %s overloaded on %s: %.2fh", inst.id, day, hours)
                conflicts.append(Conflict(
                    kind=OVERLOAD,
                    severity=MEDIUM,
                    message=(f"{inst.label} is overloaded on {day} with {hours:g} hours "
                             f"(max: {inst.max_hours_per_day:g})"),
                    placement_ids=tuple(ids_by_key.get((inst.id, day), [])),
                    instructor_id=inst.id,
                    day=day,
                ))
    return conflicts


def room_utilization(placements: Sequence[Placement], document: TimetableInput) -> List[RoomUtilization]:
    config = document.config
    total_slots = len(config.working_days) * config.teaching_slots_per_day
    df = placements_frame(placements, config)
    occupied: Dict[str, int] = df.groupby("room_id")["duration"].sum().to_dict()

    out: List[RoomUtilization] = []
    for room in document.rooms:
        entries = [p for p in placements if p.room.id == room.id]
        schedule: Dict[str, Dict[int, str]] = {day: {} for day in config.working_days}
        for p in entries:
            for s in p.slots:
                schedule.setdefault(p.day, {})[s] = p.subject.label
        used = int(occupied.get(room.id, 0))
        pct = used / total_slots * 100 if total_slots > 0 else 0.0
        out.append(RoomUtilization(
            room_id=room.id,
            room_name=room.label,
            total_slots=total_slots,
            occupied_slots=used,
            utilization_percentage=pct,
            schedule=schedule,
            entries=entries,
        ))
    return out


def compute_statistics(document: TimetableInput, placements: Sequence[Placement], conflicts: Sequence[Conflict],
                       instructor_timetables: Sequence[InstructorTimetable],
                       utilization: Sequence[RoomUtilization]) -> Statistics:
    """Aggregate counts for a run.

    success_rate is placements / (faculty assignments * 2) * 100, a rough
    fill estimate rather than an exact ratio of placed to required sessions.
    """
    config = document.config
    total_assignments = sum(len(s.assignments) for c in document.cohorts for s in c.subjects)
    loads = [t.total_hours for t in instructor_timetables]
    pcts = [r.utilization_percentage for r in utilization]
    return Statistics(
        total_cohorts=len(document.cohorts),
        total_sections=sum(len(c.sections) for c in document.cohorts),
        total_subjects=sum(len(c.subjects) for c in document.cohorts),
        total_instructors=len(document.instructors),
        total_hours=sum(p.hours(config) for p in placements),
        average_instructor_load=sum(loads) / len(loads) if loads else 0.0,
        room_utilization_percentage=sum(pcts) / len(pcts) if pcts else 0.0,
        conflict_count=len(conflicts),
        success_rate=len(placements) / (total_assignments * 2) * 100 if total_assignments > 0 else 0.0,
    )


def summary(report: TimetableReport, document: TimetableInput) -> str:
    st = report.statistics
    config = document.config
    G = build_clash_graph(report.placements)
    by_kind: Dict[str, int] = {}
    for c in report.conflicts:
        by_kind[c.kind] = by_kind.get(c.kind, 0) + 1
    dropped = sum(c.sessions for c in report.conflicts if c.kind == UNPLACEABLE)
    ok_clash = clashes_ok(G)
    ok_breaks = breaks_ok(report.placements, config)
    ok_bounds = bounds_ok(report.placements, config)
    ok_cap = capacity_ok(report.placements, document)
    ok_rooms = room_types_ok(report.placements)
    warning = ""
    if not config.working_days or config.teaching_slots_per_day <= 0:
        warning = (
            f"Warning: {len(config.working_days)} working days x {config.teaching_slots_per_day} "
            f"teaching slots; nothing can be scheduled.\n"
        )
    return (
        f"Cohorts: {st.total_cohorts}  Sections: {st.total_sections}  Subjects: {st.total_subjects}  "
        f"Instructors: {st.total_instructors}\n"
        f"Sessions placed: {len(report.placements)}  Sessions dropped: {dropped}  "
        f"Hours: {st.total_hours:g}\n"
        f"Average instructor load: {st.average_instructor_load:.2f}h  "
        f"Average room utilization: {st.room_utilization_percentage:.1f}%\n"
        f"Conflicts: {st.conflict_count}  (unplaceable: {by_kind.get(UNPLACEABLE, 0)}, "
        f"overload: {by_kind.get(OVERLOAD, 0)}, unresolved: {by_kind.get(UNRESOLVED_REFERENCE, 0)})\n"
        f"Success rate (estimate): {st.success_rate:.1f}%\n"
        f"Valid (clashes): {ok_clash}  Valid (breaks): {ok_breaks}  Valid (bounds): {ok_bounds}  "
        f"Valid (capacity): {ok_cap}  Valid (room types): {ok_rooms}\n"
        f"{warning}"
    )
