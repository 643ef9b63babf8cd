from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

LECTURE = "lecture"
LAB = "lab"
BOTH = "both"

CLASSROOM = "classroom"
LABORATORY = "lab"
AUDITORIUM = "auditorium"

HIGH = "high"
MEDIUM = "medium"
LOW = "low"

# conflict kinds
UNPLACEABLE = "unplaceable"
OVERLOAD = "overload"
CLASH = "clash"  # reserved; the engine never double-books
UNRESOLVED_REFERENCE = "unresolved_reference"

LAB_DURATION = 2  # slots per lab session, regardless of slot length


@dataclass(frozen=True)
class Section:
    id: str
    headcount: int
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class FacultyAssignment:
    instructor_id: str
    mode: str = BOTH
    # empty -> applies to every section of the cohort
    section_ids: Tuple[str, ...] = ()

    def applies_to(self, section_id: str) -> bool:
        return not self.section_ids or section_id in self.section_ids


@dataclass(frozen=True)
class SubjectRequirement:
    id: str
    name: str = ""
    code: str = ""
    mode: str = LECTURE
    frequency: int = 1  # sessions per week
    priority: str = MEDIUM  # carried, not used for ordering
    room_type: Optional[str] = None
    lecture_hours: float = 1.0
    lab_hours: float = 2.0
    assignments: Tuple[FacultyAssignment, ...] = ()

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class Cohort:
    id: str
    name: str = ""
    year: int = 1
    sections: Tuple[Section, ...] = ()
    subjects: Tuple[SubjectRequirement, ...] = ()

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class Instructor:
    id: str
    name: str = ""
    email: str = ""
    max_hours_per_day: float = 6.0
    max_hours_per_week: float = 30.0  # informational
    unavailable_slots: Tuple[str, ...] = ()  # "monday-1"

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class Room:
    id: str
    capacity: int
    type: str = CLASSROOM
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class ScheduleConfig:
    working_days: Tuple[str, ...] = ("monday", "tuesday", "wednesday", "thursday", "friday")
    slots_per_day: int = 8
    slot_duration_min: int = 60
    break_slots: Tuple[int, ...] = ()
    lunch_slot: Optional[int] = None  # informational
    start_time: str = "09:00"

    @property
    def slot_hours(self) -> float:
        return self.slot_duration_min / 60

    @property
    def teaching_slots_per_day(self) -> int:
        # raw count: duplicate or out-of-range breaks still shrink the day
        return self.slots_per_day - len(self.break_slots)


@dataclass(frozen=True)
class TimetableInput:
    cohorts: Tuple[Cohort, ...] = ()
    instructors: Tuple[Instructor, ...] = ()
    rooms: Tuple[Room, ...] = ()
    config: ScheduleConfig = field(default_factory=ScheduleConfig)


@dataclass(frozen=True)
class Placement:
    cohort_id: str
    section_id: str
    subject: SubjectRequirement
    instructor: Instructor
    room: Room
    day: str
    slot: int
    duration: int
    mode: str  # lecture | lab, never both

    @property
    def id(self) -> str:
        return f"{self.cohort_id}-{self.section_id}-{self.subject.id}-{self.instructor.id}-{self.day}-{self.slot}"

    @property
    def section_key(self) -> Tuple[str, str]:
        return (self.cohort_id, self.section_id)

    @property
    def slots(self) -> range:
        return range(self.slot, self.slot + self.duration)

    def hours(self, config: ScheduleConfig) -> float:
        return self.duration * config.slot_hours


@dataclass(frozen=True)
class Conflict:
    kind: str
    severity: str
    message: str
    placement_ids: Tuple[str, ...] = ()
    subject_id: Optional[str] = None
    cohort_id: Optional[str] = None
    section_id: Optional[str] = None
    instructor_id: Optional[str] = None
    day: Optional[str] = None
    sessions: int = 1  # required sessions this record accounts for


@dataclass
class SectionTimetable:
    cohort_id: str
    section_id: str
    entries: List[Placement] = field(default_factory=list)


@dataclass
class InstructorTimetable:
    instructor_id: str
    entries: List[Placement] = field(default_factory=list)
    total_hours: float = 0.0
    daily_hours: Dict[str, float] = field(default_factory=dict)


@dataclass
class RoomUtilization:
    room_id: str
    room_name: str
    total_slots: int
    occupied_slots: int
    utilization_percentage: float
    # day -> slot -> subject name
    schedule: Dict[str, Dict[int, str]] = field(default_factory=dict)
    entries: List[Placement] = field(default_factory=list)


@dataclass
class Statistics:
    total_cohorts: int = 0
    total_sections: int = 0
    total_subjects: int = 0
    total_instructors: int = 0
    total_hours: float = 0.0
    average_instructor_load: float = 0.0
    room_utilization_percentage: float = 0.0
    conflict_count: int = 0
    success_rate: float = 0.0


@dataclass
class TimetableReport:
    placements: List[Placement] = field(default_factory=list)
    section_timetables: List[SectionTimetable] = field(default_factory=list)
    instructor_timetables: List[InstructorTimetable] = field(default_factory=list)
    room_utilization: List[RoomUtilization] = field(default_factory=list)
    conflicts: List[Conflict] = field(default_factory=list)
    statistics: Statistics = field(default_factory=Statistics)
