import pytest

from classtime.models import (
    BOTH, CLASSROOM, LABORATORY, LECTURE,
    Cohort, FacultyAssignment, Instructor, Room, ScheduleConfig, Section,
    SubjectRequirement, TimetableInput,
)

DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


def make_document(mode=LECTURE, frequency=3, room_capacity=50, headcount=40, max_hours_per_day=6,
                  assignment_mode=BOTH, rooms=None, config=None, instructors=None, assignments=None):
    """One cohort, one section, one subject taught by F1."""
    if assignments is None:
        assignments = (FacultyAssignment(instructor_id="F1", mode=assignment_mode),)
    subject = SubjectRequirement(id="S1", name="Algorithms", code="CS101", mode=mode,
                                 frequency=frequency, assignments=tuple(assignments))
    cohort = Cohort(id="B1", name="Year 1", sections=(Section(id="D1", name="A", headcount=headcount),),
                    subjects=(subject,))
    if instructors is None:
        instructors = (Instructor(id="F1", name="Ada", max_hours_per_day=max_hours_per_day),)
    if rooms is None:
        rooms = (Room(id="R1", name="Room 101", type=CLASSROOM, capacity=room_capacity),)
    if config is None:
        config = ScheduleConfig(working_days=DAYS, slots_per_day=8, slot_duration_min=60, break_slots=(4,))
    return TimetableInput(cohorts=(cohort,), instructors=tuple(instructors), rooms=tuple(rooms), config=config)


@pytest.fixture
def config():
    return ScheduleConfig(working_days=DAYS, slots_per_day=8, slot_duration_min=60, break_slots=(4,))


@pytest.fixture
def dense_document():
    """Two cohorts competing for two instructors and three rooms."""
    instructors = (
        Instructor(id="F1", name="Ada", max_hours_per_day=3),
        Instructor(id="F2", name="Grace", max_hours_per_day=4),
    )
    rooms = (
        Room(id="R1", capacity=45),
        Room(id="R2", capacity=80),
        Room(id="L1", type=LABORATORY, capacity=60),
    )
    b1 = Cohort(
        id="B1",
        sections=(Section(id="D1", headcount=40), Section(id="D2", headcount=70)),
        subjects=(
            SubjectRequirement(id="MATH", mode=LECTURE, frequency=4,
                               assignments=(FacultyAssignment("F1", LECTURE, ("D1",)),
                                            FacultyAssignment("F2", LECTURE, ("D2",)))),
            SubjectRequirement(id="PHYS", mode=BOTH, frequency=3,
                               assignments=(FacultyAssignment("F2", BOTH),)),
        ),
    )
    b2 = Cohort(
        id="B2",
        sections=(Section(id="D1", headcount=55),),
        subjects=(
            SubjectRequirement(id="CHEM", mode=BOTH, frequency=5,
                               assignments=(FacultyAssignment("F1", BOTH),)),
        ),
    )
    config = ScheduleConfig(working_days=DAYS[:3], slots_per_day=6, slot_duration_min=60, break_slots=(3,))
    return TimetableInput(cohorts=(b1, b2), instructors=instructors, rooms=rooms, config=config)
