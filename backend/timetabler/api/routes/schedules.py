import logging

from fastapi import APIRouter, Depends, Query, status

from timetabler.api.deps import get_store
from timetabler.models.schedule import ScheduleStatus
from timetabler.schemas.generation import (
    GenerateAllResponse,
    GenerateScheduleResponse,
    GenerationRequest,
    MultiGenerationRequest,
)
from timetabler.schemas.schedule import InstructorScheduleEntry, ScheduleOut
from timetabler.services.orchestrator import generate_all_batches
from timetabler.services.placement import generate_schedule
from timetabler.services.store import EntityStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerateScheduleResponse)
def generate(payload: GenerationRequest, store: EntityStore = Depends(get_store)) -> GenerateScheduleResponse:
    result = generate_schedule(store, payload)
    schedule = store.upsert_schedule(
        payload.batch_id,
        payload.semester_id,
        payload.section,
        entries=result.entries,
        department=payload.department,
        status=ScheduleStatus.draft,
    )
    return GenerateScheduleResponse(
        schedule=ScheduleOut.model_validate(schedule),
        conflicts=result.conflicts,
        warnings=result.warnings,
    )


@router.post("/generate-all", response_model=GenerateAllResponse)
def generate_all(payload: MultiGenerationRequest, store: EntityStore = Depends(get_store)) -> GenerateAllResponse:
    result = generate_all_batches(store, payload)
    saved: list[ScheduleOut] = []
    for item in result.schedules:
        schedule = store.upsert_schedule(
            item.batch_id,
            payload.semester_id,
            item.section,
            entries=item.entries,
            department=payload.department,
            status=ScheduleStatus.draft,
        )
        saved.append(ScheduleOut.model_validate(schedule))
    return GenerateAllResponse(
        schedules=saved,
        conflicts=result.total_conflicts,
        warnings=result.total_warnings,
        message=f"Generated {len(saved)} schedules successfully",
    )


@router.get("/instructor/{instructor_id}", response_model=list[InstructorScheduleEntry])
def instructor_schedule(instructor_id: str, store: EntityStore = Depends(get_store)) -> list[InstructorScheduleEntry]:
    return store.instructor_entries(instructor_id)


@router.get("", response_model=list[ScheduleOut])
def list_schedules(
    batch_id: str | None = Query(default=None, alias="batchId"),
    semester_id: str | None = Query(default=None, alias="semesterId"),
    section: str | None = Query(default=None),
    store: EntityStore = Depends(get_store),
) -> list[ScheduleOut]:
    schedules = store.list_schedules(batch_id=batch_id, semester_id=semester_id, section=section)
    return [ScheduleOut.model_validate(schedule) for schedule in schedules]


@router.get("/{schedule_id}", response_model=ScheduleOut)
def get_schedule(schedule_id: str, store: EntityStore = Depends(get_store)) -> ScheduleOut:
    return ScheduleOut.model_validate(store.get_schedule(schedule_id))


@router.patch("/{schedule_id}/publish", response_model=ScheduleOut)
def publish_schedule(schedule_id: str, store: EntityStore = Depends(get_store)) -> ScheduleOut:
    return ScheduleOut.model_validate(store.publish_schedule(schedule_id))


@router.delete("/{schedule_id}", status_code=status.HTTP_200_OK)
def delete_schedule(schedule_id: str, store: EntityStore = Depends(get_store)) -> dict:
    store.delete_schedule(schedule_id)
    logger.info("Deleted schedule %s", schedule_id)
    return {"success": True}
