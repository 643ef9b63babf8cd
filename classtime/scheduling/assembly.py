from typing import Dict, List, Sequence

from ..models import InstructorTimetable, Placement, SectionTimetable, TimetableInput


def section_timetables(placements: Sequence[Placement], document: TimetableInput) -> List[SectionTimetable]:
    by_section: Dict[tuple, List[Placement]] = {}
    for p in placements:
        by_section.setdefault(p.section_key, []).append(p)
    return [
        SectionTimetable(cohort_id=c.id, section_id=s.id, entries=by_section.get((c.id, s.id), []))
        for c in document.cohorts
        for s in c.sections
    ]


def instructor_timetables(placements: Sequence[Placement], document: TimetableInput) -> List[InstructorTimetable]:
    config = document.config
    out: List[InstructorTimetable] = []
    for inst in document.instructors:
        entries = [p for p in placements if p.instructor.id == inst.id]
        daily: Dict[str, float] = {}
        total = 0.0
        for p in entries:
            hours = p.hours(config)
            daily[p.day] = daily.get(p.day, 0.0) + hours
            total += hours
        out.append(InstructorTimetable(instructor_id=inst.id, entries=entries, total_hours=total, daily_hours=daily))
    return out
