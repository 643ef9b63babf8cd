import io
import json
import logging
import os
from dataclasses import asdict
from typing import Any, Dict, IO, Union

from .models import (
    BOTH, CLASSROOM, LECTURE, MEDIUM,
    Cohort, FacultyAssignment, Instructor, Placement, Room, ScheduleConfig, Section,
    SubjectRequirement, TimetableInput, TimetableReport,
)

logger = logging.getLogger(__name__)

TextOrPath = Union[str, os.PathLike, IO]

_MISSING = object()


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', encoding='utf-8')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8')
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seek') and src.seekable():
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def _pick(row: Dict[str, Any], *keys: str, default: Any = _MISSING) -> Any:
    """First present key among snake_case / camelCase spellings."""
    for k in keys:
        if k in row and row[k] is not None:
            return row[k]
    if default is _MISSING:
        raise KeyError(f"missing required key {keys[0]!r}")
    return default


def _section(row: Dict[str, Any]) -> Section:
    return Section(
        id=str(row['id']).strip(),
        name=str(row.get('name', '')),
        headcount=int(_pick(row, 'headcount', 'studentCount', 'student_count')),
    )


def _assignment(row: Dict[str, Any]) -> FacultyAssignment:
    return FacultyAssignment(
        instructor_id=str(_pick(row, 'instructor_id', 'facultyId', 'faculty_id')).strip(),
        mode=str(_pick(row, 'mode', 'type', default=BOTH)),
        section_ids=tuple(str(s) for s in _pick(row, 'section_ids', 'divisionIds', 'division_ids', default=())),
    )


def _subject(row: Dict[str, Any]) -> SubjectRequirement:
    requires = _pick(row, 'requires_special_room', 'requiresSpecialRoom', default=None)
    if row.get('room_type') is not None:
        # snake_case: a bare room type restricts unless explicitly switched off
        room_type = row['room_type'] if requires is None or requires else None
    else:
        # camelCase: roomType only counts together with requiresSpecialRoom
        room_type = row.get('roomType') if requires else None
    if requires and room_type is None:
        logger.warning("Subject %s requires a special room but names no room type", row.get('id'))
    return SubjectRequirement(
        id=str(row['id']).strip(),
        name=str(row.get('name', '')),
        code=str(row.get('code', '')),
        mode=str(_pick(row, 'mode', 'type', default=LECTURE)),
        frequency=int(row.get('frequency', 1)),
        priority=str(row.get('priority', MEDIUM)),
        room_type=room_type,
        lecture_hours=float(_pick(row, 'lecture_hours', 'lectureHours', default=1)),
        lab_hours=float(_pick(row, 'lab_hours', 'labHours', default=2)),
        assignments=tuple(_assignment(a) for a in _pick(row, 'assignments', 'assignedFaculty',
                                                        'assigned_faculty', default=())),
    )


def _cohort(row: Dict[str, Any]) -> Cohort:
    return Cohort(
        id=str(row['id']).strip(),
        name=str(row.get('name', '')),
        year=int(row.get('year', 1)),
        sections=tuple(_section(s) for s in _pick(row, 'sections', 'divisions', default=())),
        subjects=tuple(_subject(s) for s in row.get('subjects', ())),
    )


def _instructor(row: Dict[str, Any]) -> Instructor:
    return Instructor(
        id=str(row['id']).strip(),
        name=str(row.get('name', '')),
        email=str(row.get('email', '')),
        max_hours_per_day=float(_pick(row, 'max_hours_per_day', 'maxHoursPerDay', default=6)),
        max_hours_per_week=float(_pick(row, 'max_hours_per_week', 'maxHoursPerWeek', default=30)),
        unavailable_slots=tuple(str(s) for s in _pick(row, 'unavailable_slots', 'unavailableSlots', default=())),
    )


def _room(row: Dict[str, Any]) -> Room:
    return Room(
        id=str(row['id']).strip(),
        name=str(row.get('name', '')),
        type=str(row.get('type', CLASSROOM)),
        capacity=int(row['capacity']),
    )


def _config(row: Dict[str, Any]) -> ScheduleConfig:
    defaults = ScheduleConfig()
    lunch = _pick(row, 'lunch_slot', 'lunchSlot', default=None)
    return ScheduleConfig(
        working_days=tuple(str(d) for d in _pick(row, 'working_days', 'workingDays', default=defaults.working_days)),
        slots_per_day=int(_pick(row, 'slots_per_day', 'slotsPerDay', default=defaults.slots_per_day)),
        slot_duration_min=int(_pick(row, 'slot_duration_min', 'slotDuration', 'slot_duration',
                                    default=defaults.slot_duration_min)),
        break_slots=tuple(int(b) for b in _pick(row, 'break_slots', 'breakSlots', default=())),
        lunch_slot=int(lunch) if lunch is not None else None,
        start_time=str(_pick(row, 'start_time', 'startTime', default=defaults.start_time)),
    )


def document_from_dict(data: Dict[str, Any]) -> TimetableInput:
    return TimetableInput(
        cohorts=tuple(_cohort(c) for c in _pick(data, 'cohorts', 'batches', default=())),
        instructors=tuple(_instructor(i) for i in _pick(data, 'instructors', 'faculty', default=())),
        rooms=tuple(_room(r) for r in data.get('rooms', ())),
        config=_config(_pick(data, 'config', 'scheduleConfig', 'schedule_config', default={})),
    )


def load_document(src: TextOrPath) -> TimetableInput:
    f, should_close = _open_text(src)
    try:
        data = json.load(f)
    finally:
        if should_close:
            f.close()
    return document_from_dict(data)


def _placement_dict(p: Placement) -> Dict[str, Any]:
    return {
        'id': p.id,
        'cohort_id': p.cohort_id,
        'section_id': p.section_id,
        'subject_id': p.subject.id,
        'subject_name': p.subject.label,
        'instructor_id': p.instructor.id,
        'room_id': p.room.id,
        'day': p.day,
        'slot': p.slot,
        'duration': p.duration,
        'mode': p.mode,
    }


def report_to_dict(report: TimetableReport) -> Dict[str, Any]:
    return {
        'placements': [_placement_dict(p) for p in report.placements],
        'section_timetables': [
            {'cohort_id': t.cohort_id, 'section_id': t.section_id, 'entries': [p.id for p in t.entries]}
            for t in report.section_timetables
        ],
        'instructor_timetables': [
            {
                'instructor_id': t.instructor_id,
                'entries': [p.id for p in t.entries],
                'total_hours': t.total_hours,
                'daily_hours': dict(t.daily_hours),
            }
            for t in report.instructor_timetables
        ],
        'room_utilization': [
            {
                'room_id': r.room_id,
                'room_name': r.room_name,
                'total_slots': r.total_slots,
                'occupied_slots': r.occupied_slots,
                'utilization_percentage': r.utilization_percentage,
                # JSON object keys must be strings
                'schedule': {day: {str(s): name for s, name in slots.items()} for day, slots in r.schedule.items()},
            }
            for r in report.room_utilization
        ],
        'conflicts': [dict(asdict(c), placement_ids=list(c.placement_ids)) for c in report.conflicts],
        'statistics': asdict(report.statistics),
    }


def save_report_json(path: str, report: TimetableReport):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(report_to_dict(report), f, indent=2)
