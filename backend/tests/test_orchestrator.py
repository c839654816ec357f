import logging

from timetabler.models.batch import Batch
from timetabler.schemas.generation import MultiGenerationRequest
from timetabler.services import orchestrator
from timetabler.services.orchestrator import generate_all_batches


def test_shared_instructor_across_batches_yields_one_section_conflict(seed, store):
    first_batch = seed.batch("2018", sections=("A",))
    second_batch = seed.batch("2019", sections=("A",))
    semester = seed.semester(first_batch)
    instructor = seed.instructor("Tigist Bekele")
    seed.room("CR1")
    seed.room("CR2")
    seed.course("CSE101", batch=first_batch, semester=semester, instructor=instructor)
    seed.course("CSE201", batch=second_batch, semester=semester, instructor=instructor)

    result = generate_all_batches(store, MultiGenerationRequest(semester_id=semester.id))

    assert [(item.batch_number, item.section) for item in result.schedules] == [("2018", "A"), ("2019", "A")]
    assert all(len(item.entries) == 1 for item in result.schedules)
    assert len(result.total_conflicts) == 1
    conflict = result.total_conflicts[0]
    assert conflict.type == "section"
    assert {conflict.entry1.course_code, conflict.entry2.course_code} == {"CSE101", "CSE201"}
    assert result.total_warnings == []


def test_failed_sections_become_warnings(seed, store):
    batch = seed.batch("2018", sections=("A", "B"))
    empty_batch = seed.batch("2020", sections=("A",))
    semester = seed.semester(batch)
    instructor = seed.instructor("Tigist Bekele", max_load=12)
    seed.room("CR1")
    seed.course("CSE101", batch=batch, semester=semester, instructor=instructor)

    result = generate_all_batches(store, MultiGenerationRequest(semester_id=semester.id))

    assert [(item.batch_number, item.section) for item in result.schedules] == [("2018", "A"), ("2018", "B")]
    assert len(result.total_warnings) == 1
    assert result.total_warnings[0].startswith("Failed to generate schedule for Batch 2020, Section A: No courses found")
    # Sections A and B are generated independently and both land on Monday morning.
    assert [conflict.type for conflict in result.total_conflicts] == ["section"]
    assert empty_batch.id not in {item.batch_id for item in result.schedules}


def test_section_warnings_are_aggregated(seed, store):
    batch = seed.batch("2018", sections=("A",))
    semester = seed.semester(batch)
    instructor = seed.instructor("Tigist Bekele", max_load=3)
    seed.room("CR1")
    seed.course("CSE101", batch=batch, semester=semester, instructor=instructor)
    seed.course("CSE102", batch=batch, semester=semester, instructor=instructor)

    result = generate_all_batches(store, MultiGenerationRequest(semester_id=semester.id))

    assert result.total_warnings == ["Instructor Tigist Bekele exceeds max load for CSE102"]
    assert result.schedules[0].warnings == result.total_warnings
    assert result.total_conflicts == []


def test_section_whose_request_cannot_be_built_becomes_a_warning(seed, store):
    batch = seed.batch("2018", sections=("A",))
    semester = seed.semester(batch)
    instructor = seed.instructor("Tigist Bekele")
    seed.room("CR1")
    seed.course("CSE101", batch=batch, semester=semester, instructor=instructor)
    # Stored without BatchCreate, as a legacy row would be.
    store.db.add(Batch(batch_number="2019", sections=["Evening-Extension-Group-1"]))
    store.db.commit()

    result = generate_all_batches(store, MultiGenerationRequest(semester_id=semester.id))

    assert [(item.batch_number, item.section) for item in result.schedules] == [("2018", "A")]
    assert len(result.total_warnings) == 1
    assert result.total_warnings[0].startswith(
        "Failed to generate schedule for Batch 2019, Section Evening-Extension-Group-1: "
    )


def test_unexpected_failures_do_not_stop_other_sections(seed, store, monkeypatch, caplog):
    first_batch = seed.batch("2018", sections=("A",))
    second_batch = seed.batch("2019", sections=("A",))
    semester = seed.semester(first_batch)
    instructor = seed.instructor("Tigist Bekele")
    seed.room("CR1")
    seed.course("CSE101", batch=first_batch, semester=semester, instructor=instructor)
    seed.course("CSE201", batch=second_batch, semester=semester, instructor=instructor)

    failing_batch_id = first_batch.id
    real_generate = orchestrator.generate_schedule

    def flaky_generate(store, request):
        if request.batch_id == failing_batch_id:
            raise RuntimeError("store connection reset")
        return real_generate(store, request)

    monkeypatch.setattr(orchestrator, "generate_schedule", flaky_generate)

    with caplog.at_level(logging.WARNING, logger="timetabler.services.orchestrator"):
        result = generate_all_batches(store, MultiGenerationRequest(semester_id=semester.id))

    assert [item.batch_number for item in result.schedules] == ["2019"]
    assert result.total_warnings == [
        "Failed to generate schedule for Batch 2018, Section A: store connection reset"
    ]
    assert [record.exc_info is not None for record in caplog.records] == [True]


def test_precondition_failures_are_logged_without_traceback(seed, store, caplog):
    batch = seed.batch("2018", sections=("A",))
    semester = seed.semester(batch)

    with caplog.at_level(logging.WARNING, logger="timetabler.services.orchestrator"):
        result = generate_all_batches(store, MultiGenerationRequest(semester_id=semester.id))

    assert result.schedules == []
    assert len(result.total_warnings) == 1
    assert len(caplog.records) == 1
    assert caplog.records[0].exc_info is None
    assert "No courses found" in caplog.records[0].getMessage()
