from __future__ import annotations

import logging
from dataclasses import dataclass, field

from timetabler.core.exceptions import AppError
from timetabler.schemas.generation import GenerationRequest, MultiGenerationRequest
from timetabler.schemas.schedule import ConflictPayload, ScheduleEntryPayload
from timetabler.services.conflict_service import SectionTimetable, detect_section_conflicts
from timetabler.services.placement import generate_schedule
from timetabler.services.store import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class SectionSchedule:
    batch_id: str
    batch_number: str
    section: str
    entries: list[ScheduleEntryPayload] = field(default_factory=list)
    conflicts: list[ConflictPayload] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.batch_number}-{self.section}"


@dataclass
class MultiBatchResult:
    schedules: list[SectionSchedule] = field(default_factory=list)
    total_conflicts: list[ConflictPayload] = field(default_factory=list)
    total_warnings: list[str] = field(default_factory=list)


def _failure_warning(batch_number: str, section: str, message: str) -> str:
    return f"Failed to generate schedule for Batch {batch_number}, Section {section}: {message}"


def generate_all_batches(store: EntityStore, request: MultiGenerationRequest) -> MultiBatchResult:
    """Run single-section placement for every (batch, section) in the store.

    Any failing section, including one whose request cannot be built,
    becomes a warning and the loop moves on. Once every section has a
    timetable, instructors booked at the same time in two sections are
    reported as ``section`` conflicts.
    """
    result = MultiBatchResult()
    options = request.model_dump(by_alias=False)

    for batch in store.find_all_batches():
        for section in batch.sections:
            try:
                section_request = GenerationRequest(**options, batch_id=batch.id, section=section)
                placement = generate_schedule(store, section_request)
            except AppError as exc:
                logger.warning(
                    "Generation failed for batch %s section %s: %s",
                    batch.batch_number,
                    section,
                    exc.message,
                )
                result.total_warnings.append(_failure_warning(batch.batch_number, section, exc.message))
                continue
            except Exception as exc:
                logger.warning(
                    "Unexpected generation failure for batch %s section %s",
                    batch.batch_number,
                    section,
                    exc_info=True,
                )
                result.total_warnings.append(_failure_warning(batch.batch_number, section, str(exc)))
                continue

            result.schedules.append(
                SectionSchedule(
                    batch_id=batch.id,
                    batch_number=batch.batch_number,
                    section=section,
                    entries=placement.entries,
                    conflicts=placement.conflicts,
                    warnings=placement.warnings,
                )
            )
            result.total_conflicts.extend(placement.conflicts)
            result.total_warnings.extend(placement.warnings)

    cross_section = detect_section_conflicts(
        [SectionTimetable(label=item.label, entries=item.entries) for item in result.schedules]
    )
    result.total_conflicts.extend(cross_section)

    logger.info(
        "Generated %d section schedules (%d conflicts, %d cross-section, %d warnings)",
        len(result.schedules),
        len(result.total_conflicts),
        len(cross_section),
        len(result.total_warnings),
    )
    return result
