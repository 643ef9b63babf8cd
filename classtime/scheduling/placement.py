import logging
import math
from typing import Dict, List, Optional, Tuple

from ..availability import AvailabilityTracker
from ..models import (
    BOTH, HIGH, LAB, LAB_DURATION, LECTURE, LOW, UNPLACEABLE, UNRESOLVED_REFERENCE,
    Cohort, Conflict, FacultyAssignment, Instructor, Placement, Room, Section,
    SubjectRequirement, TimetableInput,
)
from .room_assignment import candidate_rooms, first_free_room

logger = logging.getLogger(__name__)


def _covers(mode: str, wanted: str) -> bool:
    return mode == wanted or mode == BOTH


def session_plan(subject: SubjectRequirement, assignment: FacultyAssignment) -> List[Tuple[str, int, int]]:
    """(mode, session count, slots per session) for one faculty assignment.

    Lectures are one slot each, `frequency` times a week; labs are always
    double-length, ceil(frequency / 2) times a week.
    """
    plan = []
    if _covers(assignment.mode, LECTURE) and _covers(subject.mode, LECTURE):
        plan.append((LECTURE, subject.frequency, 1))
    if _covers(assignment.mode, LAB) and _covers(subject.mode, LAB):
        plan.append((LAB, math.ceil(subject.frequency / 2), LAB_DURATION))
    return plan


class PlacementEngine:
    """Greedy first-fit placement of every required teaching session.

    Days are scanned in configured order, slots in ascending order, and the
    first (day, slot, room) that is free for the instructor, the section and a
    candidate room is committed. Placements are never revisited, and subject
    priority does not change the scan order. An engine, and the tracker it
    drives, serve exactly one run.
    """

    def __init__(self, document: TimetableInput, tracker: Optional[AvailabilityTracker] = None):
        self.document = document
        self.config = document.config
        self.tracker = tracker if tracker is not None else AvailabilityTracker(document.config)
        self.placements: List[Placement] = []
        self.conflicts: List[Conflict] = []
        self._instructors: Dict[str, Instructor] = {i.id: i for i in document.instructors}
        self._done = False

    def run(self) -> Tuple[List[Placement], List[Conflict]]:
        if self._done:
            raise RuntimeError("PlacementEngine already ran; build a new engine and tracker per run")
        self._done = True
        self.tracker.block_unavailable(self.document.instructors)
        for cohort in self.document.cohorts:
            for section in cohort.sections:
                self._schedule_section(cohort, section)
        logger.info("Placed %d sessions, %d conflicts", len(self.placements), len(self.conflicts))
        return self.placements, self.conflicts

    def _schedule_section(self, cohort: Cohort, section: Section):
        logger.debug("Scheduling %s-%s", cohort.label, section.label)
        for subject in cohort.subjects:
            for assignment in subject.assignments:
                if not assignment.applies_to(section.id):
                    continue
                instructor = self._instructors.get(assignment.instructor_id)
                if instructor is None:
                    logger.warning("Unknown instructor %r for %s (%s-%s); assignment skipped",
                                   assignment.instructor_id, subject.id, cohort.id, section.id)
                    self.conflicts.append(Conflict(
                        kind=UNRESOLVED_REFERENCE,
                        severity=LOW,
                        message=(f"Instructor {assignment.instructor_id} assigned to {subject.label} "
                                 f"for {cohort.label}-{section.label} does not exist"),
                        subject_id=subject.id,
                        cohort_id=cohort.id,
                        section_id=section.id,
                        instructor_id=assignment.instructor_id,
                        sessions=sum(n for _, n, _ in session_plan(subject, assignment)),
                    ))
                    continue
                for mode, count, duration in session_plan(subject, assignment):
                    self._schedule_sessions(cohort, section, subject, instructor, mode, count, duration)

    def _schedule_sessions(self, cohort: Cohort, section: Section, subject: SubjectRequirement,
                           instructor: Instructor, mode: str, count: int, duration: int):
        if count <= 0:
            return
        rooms = candidate_rooms(self.document.rooms, subject, mode, section.headcount)
        if not rooms:
            # every session of this mode would see the same empty set
            self.conflicts.append(Conflict(
                kind=UNPLACEABLE,
                severity=HIGH,
                message=f"No suitable room found for {subject.label} ({mode}) for {cohort.label}-{section.label}",
                subject_id=subject.id,
                cohort_id=cohort.id,
                section_id=section.id,
                instructor_id=instructor.id,
                sessions=count,
            ))
            return
        for _ in range(count):
            if self.place_session(cohort, section, subject, instructor, mode, duration, rooms) is None:
                self.conflicts.append(Conflict(
                    kind=UNPLACEABLE,
                    severity=HIGH,
                    message=(f"Could not schedule {subject.label} ({mode}) for {cohort.label}-{section.label} "
                             f"with {instructor.label}"),
                    subject_id=subject.id,
                    cohort_id=cohort.id,
                    section_id=section.id,
                    instructor_id=instructor.id,
                ))

    def place_session(self, cohort: Cohort, section: Section, subject: SubjectRequirement,
                      instructor: Instructor, mode: str, duration: int, rooms: List[Room]) -> Optional[Placement]:
        section_key = (cohort.id, section.id)
        for day in self.config.working_days:
            for slot in range(1, self.config.slots_per_day + 1):
                # is_free also rejects runs crossing a break or the end of day
                if not self.tracker.is_free(instructor.id, section_key, day, slot, duration):
                    continue
                room = first_free_room(rooms, self.tracker.rooms, day, slot, duration)
                if room is None:
                    continue
                placement = Placement(
                    cohort_id=cohort.id,
                    section_id=section.id,
                    subject=subject,
                    instructor=instructor,
                    room=room,
                    day=day,
                    slot=slot,
                    duration=duration,
                    mode=mode,
                )
                self.tracker.reserve(instructor.id, room.id, section_key, day, slot, duration)
                self.placements.append(placement)
                logger.debug("Placed %s in %s on %s slot %d", placement.id, room.id, day, slot)
                return placement
        return None
