import io
import json

import pytest

from classtime.generator import generate_timetable
from classtime.io_utils import document_from_dict, load_document, report_to_dict, save_report_json
from classtime.models import BOTH, LAB, LABORATORY, LECTURE

CAMEL = {
    "batches": [
        {
            "id": "b1",
            "name": "CSE 2nd Year",
            "year": 2,
            "divisions": [
                {"id": "d1", "name": "A", "batchId": "b1", "studentCount": 60},
                {"id": "d2", "name": "B", "batchId": "b1", "studentCount": 55},
            ],
            "subjects": [
                {
                    "id": "s1", "name": "Data Structures", "code": "CS201", "type": "both",
                    "frequency": 3, "priority": "high", "lectureHours": 1, "labHours": 2,
                    "assignedFaculty": [
                        {"facultyId": "f1", "type": "lecture", "divisionIds": []},
                        {"facultyId": "f2", "type": "lab", "divisionIds": ["d1"]},
                    ],
                },
                {
                    "id": "s2", "name": "Seminar", "code": "CS299", "type": "lecture",
                    "frequency": 1, "priority": "low", "lectureHours": 1, "labHours": 0,
                    "requiresSpecialRoom": True, "roomType": "auditorium",
                    "assignedFaculty": [{"facultyId": "f1", "type": "both"}],
                },
                {
                    "id": "s3", "name": "Ethics", "code": "HS201", "type": "lecture",
                    "frequency": 1, "priority": "medium", "lectureHours": 1, "labHours": 0,
                    "requiresSpecialRoom": False, "roomType": "lab",
                    "assignedFaculty": [{"facultyId": "f1", "type": "lecture"}],
                },
            ],
        }
    ],
    "faculty": [
        {"id": "f1", "name": "Dr. Smith", "email": "smith@uni.edu", "subjects": ["s1"],
         "maxHoursPerDay": 6, "maxHoursPerWeek": 20, "unavailableSlots": ["monday-1"]},
        {"id": "f2", "name": "Dr. Jones", "email": "jones@uni.edu", "subjects": ["s1"],
         "maxHoursPerDay": 4, "maxHoursPerWeek": 18, "unavailableSlots": []},
    ],
    "rooms": [
        {"id": "r1", "name": "Room 101", "type": "classroom", "capacity": 60},
        {"id": "l1", "name": "Lab 1", "type": "lab", "capacity": 60},
        {"id": "a1", "name": "Main Hall", "type": "auditorium", "capacity": 200},
    ],
    "scheduleConfig": {
        "workingDays": ["monday", "tuesday", "wednesday", "thursday", "friday"],
        "slotsPerDay": 8, "slotDuration": 60, "breakSlots": [4], "lunchSlot": 4, "startTime": "09:00",
    },
}


def test_camel_case_document():
    doc = document_from_dict(CAMEL)
    cohort = doc.cohorts[0]
    assert cohort.label == "CSE 2nd Year" and cohort.year == 2
    assert [(s.id, s.headcount) for s in cohort.sections] == [("d1", 60), ("d2", 55)]
    ds = cohort.subjects[0]
    assert ds.mode == BOTH and ds.frequency == 3 and ds.priority == "high"
    assert [(a.instructor_id, a.mode, a.section_ids) for a in ds.assignments] == [
        ("f1", LECTURE, ()), ("f2", LAB, ("d1",))]
    assert cohort.subjects[1].room_type == "auditorium"
    # a room type without requiresSpecialRoom is not a restriction
    assert cohort.subjects[2].room_type is None
    assert doc.instructors[0].unavailable_slots == ("monday-1",)
    assert doc.instructors[1].max_hours_per_day == 4
    assert doc.rooms[1].type == LABORATORY
    assert doc.config.slots_per_day == 8 and doc.config.break_slots == (4,)
    assert doc.config.lunch_slot == 4


def test_snake_case_defaults():
    doc = document_from_dict({
        "cohorts": [{"id": "c1", "sections": [{"id": "a", "headcount": 30}],
                     "subjects": [{"id": "s", "assignments": [{"instructor_id": "i"}]}]}],
        "instructors": [{"id": "i"}],
        "rooms": [{"id": "r", "capacity": 30}],
    })
    subject = doc.cohorts[0].subjects[0]
    assert subject.mode == LECTURE and subject.frequency == 1 and subject.priority == "medium"
    assert subject.assignments[0].mode == BOTH
    assert doc.config.slot_duration_min == 60 and len(doc.config.working_days) == 5


def test_missing_required_key_raises():
    with pytest.raises(KeyError):
        document_from_dict({"cohorts": [{"id": "c1", "sections": [{"id": "a"}]}]})


def test_load_from_path_text_and_bytes(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(CAMEL), encoding="utf-8")
    from_path = load_document(str(path))
    from_text = load_document(io.StringIO(json.dumps(CAMEL)))
    from_bytes = load_document(io.BytesIO(json.dumps(CAMEL).encode("utf-8")))
    assert from_path == from_text == from_bytes


def test_load_rejects_unknown_source():
    with pytest.raises(TypeError):
        load_document(42)


def test_report_json(tmp_path):
    doc = document_from_dict(CAMEL)
    report = generate_timetable(doc)
    data = report_to_dict(report)
    assert len(data["placements"]) == len(report.placements)
    # unavailable monday-1 pushes f1's first lecture to slot 2
    first = data["placements"][0]
    assert (first["instructor_id"], first["day"], first["slot"]) == ("f1", "monday", 2)
    assert data["statistics"]["conflict_count"] == len(report.conflicts)
    out = tmp_path / "report.json"
    save_report_json(str(out), report)
    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert loaded["room_utilization"][0]["schedule"]["monday"]["2"] == "Data Structures"
    assert [t["section_id"] for t in loaded["section_timetables"]] == ["d1", "d2"]


def test_camel_room_type_without_flag_is_not_a_restriction():
    doc = document_from_dict({
        "batches": [{
            "id": "y1", "name": "Y1",
            "divisions": [{"id": "a", "name": "A", "studentCount": 30}],
            "subjects": [{"id": "m", "name": "Maths", "type": "lecture", "frequency": 2,
                          "roomType": "auditorium",
                          "assignedFaculty": [{"facultyId": "f1", "type": "lecture"}]}],
        }],
        "faculty": [{"id": "f1", "name": "Dr. Smith", "maxHoursPerDay": 6}],
        "rooms": [{"id": "r1", "type": "classroom", "capacity": 60}],
        "scheduleConfig": {"workingDays": ["monday"], "slotsPerDay": 4, "slotDuration": 60, "breakSlots": []},
    })
    assert doc.cohorts[0].subjects[0].room_type is None
    report = generate_timetable(doc)
    assert [(p.room.id, p.slot) for p in report.placements] == [("r1", 1), ("r1", 2)]
    assert report.conflicts == []


def test_snake_room_type_restricts_unless_switched_off():
    base = {"id": "s", "room_type": "auditorium"}
    assert document_from_dict({"cohorts": [{"id": "c", "subjects": [base]}]}).cohorts[0].subjects[0].room_type \
        == "auditorium"
    off = dict(base, requires_special_room=False)
    assert document_from_dict({"cohorts": [{"id": "c", "subjects": [off]}]}).cohorts[0].subjects[0].room_type \
        is None
