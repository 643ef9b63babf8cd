import logging

from .availability import AvailabilityTracker
from .models import TimetableInput, TimetableReport
from .scheduling.assembly import instructor_timetables, section_timetables
from .scheduling.evaluation import compute_statistics, detect_overloads, room_utilization
from .scheduling.placement import PlacementEngine

logger = logging.getLogger(__name__)


def generate_timetable(document: TimetableInput) -> TimetableReport:
    """Run placement, analysis and assembly for one input document.

    Each call starts from empty registries; nothing carries over between runs.
    Scheduling failures end up in report.conflicts, never as exceptions.
    """
    logger.info("Generating timetable: %d cohorts, %d instructors, %d rooms",
                len(document.cohorts), len(document.instructors), len(document.rooms))
    tracker = AvailabilityTracker(document.config)
    engine = PlacementEngine(document, tracker)
    placements, conflicts = engine.run()
    conflicts = list(conflicts) + detect_overloads(placements, document)

    by_instructor = instructor_timetables(placements, document)
    utilization = room_utilization(placements, document)
    stats = compute_statistics(document, placements, conflicts, by_instructor, utilization)
    logger.info("Timetable generated with %d placements and %d conflicts", len(placements), len(conflicts))
    return TimetableReport(
        placements=list(placements),
        section_timetables=section_timetables(placements, document),
        instructor_timetables=by_instructor,
        room_utilization=utilization,
        conflicts=conflicts,
        statistics=stats,
    )
