"""Deterministic synthetic input documents for demos and load tests."""
import random
from typing import List, Optional

from faker import Faker

from .models import (
    AUDITORIUM, BOTH, CLASSROOM, HIGH, LAB, LABORATORY, LECTURE, LOW, MEDIUM,
    Cohort, FacultyAssignment, Instructor, Room, ScheduleConfig, Section,
    SubjectRequirement, TimetableInput,
)


def generate_document(n_cohorts: int = 3, sections_per_cohort: int = 2, subjects_per_cohort: int = 4,
                      n_instructors: int = 8, n_rooms: int = 6, seed: int = 42,
                      config: Optional[ScheduleConfig] = None) -> TimetableInput:
    rng = random.Random(seed)
    fake = Faker()
    fake.seed_instance(seed)
    if config is None:
        config = ScheduleConfig(break_slots=(4,), lunch_slot=4)

    instructors: List[Instructor] = []
    for i in range(n_instructors):
        name = fake.name()
        instructors.append(Instructor(
            id=f"F{i + 1}",
            name=name,
            email=fake.email(),
            max_hours_per_day=rng.choice([4, 5, 6]),
            max_hours_per_week=rng.choice([18, 20, 24]),
        ))

    rooms: List[Room] = []
    for i in range(n_rooms):
        # keep at least one lab so lab sessions have somewhere to go
        rtype = LABORATORY if i % 3 == 2 else (AUDITORIUM if i == n_rooms - 1 and n_rooms > 3 else CLASSROOM)
        rooms.append(Room(id=f"R{i + 1}", name=f"Room {101 + i}", type=rtype,
                          capacity=rng.choice([40, 60, 80, 120])))

    cohorts: List[Cohort] = []
    for c in range(n_cohorts):
        sections = tuple(
            Section(id=f"D{s + 1}", name=chr(ord('A') + s), headcount=rng.randint(30, 70))
            for s in range(sections_per_cohort)
        )
        subjects = []
        for k in range(subjects_per_cohort):
            mode = rng.choice([LECTURE, LECTURE, LAB, BOTH])
            teacher = instructors[rng.randrange(n_instructors)] if instructors else None
            assignments = (FacultyAssignment(instructor_id=teacher.id, mode=BOTH),) if teacher else ()
            subjects.append(SubjectRequirement(
                id=f"C{c + 1}S{k + 1}",
                name=fake.catch_phrase(),
                code=f"CS{c + 1}{k + 1:02d}",
                mode=mode,
                frequency=rng.randint(1, 4),
                priority=rng.choice([HIGH, MEDIUM, LOW]),
                assignments=assignments,
            ))
        cohorts.append(Cohort(id=f"B{c + 1}", name=f"Year {c + 1}", year=c + 1,
                              sections=sections, subjects=tuple(subjects)))

    return TimetableInput(cohorts=tuple(cohorts), instructors=tuple(instructors),
                          rooms=tuple(rooms), config=config)
