# app/core/storage.py
"""
Persistence layer for workplaces and shifts.
"""

import datetime
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.models import Recurrence, RecurrenceType, Shift, Workplace
from app.core.shifts.recurrence import expand_recurrence
from app.database.database import ShiftRecord, WorkplaceRecord

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Generellt fel vid läsning eller skrivning av poster."""

    pass


class RecordNotFoundError(StorageError):
    """Det finns ingen arbetsplats eller inget pass med givet id."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


_WORKPLACE_FIELDS = (
    "name",
    "color",
    "hourly_wage",
    "transportation_allowance",
    "address",
    "priority",
    "travel_time_minutes",
    "night_shift_rate",
    "holiday_rate",
)

_SHIFT_FIELDS = (
    "workplace_id",
    "date",
    "start_time",
    "end_time",
    "break_minutes",
    "memo",
    "is_confirmed",
    "actual_start_time",
    "actual_end_time",
    "actual_break_minutes",
)


def workplace_from_record(record: WorkplaceRecord) -> Workplace:
    return Workplace(
        id=record.id,
        created_at=record.created_at,
        **{field: getattr(record, field) for field in _WORKPLACE_FIELDS},
    )


def shift_from_record(record: ShiftRecord) -> Shift:
    recurrence = None
    if record.recurrence_type and record.recurrence_end_date:
        recurrence = Recurrence(
            type=RecurrenceType(record.recurrence_type),
            end_date=record.recurrence_end_date,
        )

    return Shift(
        id=record.id,
        recurrence=recurrence,
        created_at=record.created_at,
        updated_at=record.updated_at,
        **{field: getattr(record, field) for field in _SHIFT_FIELDS},
    )


def _apply_shift(record: ShiftRecord, shift: Shift) -> None:
    for field in _SHIFT_FIELDS:
        setattr(record, field, getattr(shift, field))
    record.recurrence_type = shift.recurrence.type.value if shift.recurrence else None
    record.recurrence_end_date = shift.recurrence.end_date if shift.recurrence else None
    record.updated_at = shift.updated_at


class ShiftStore:
    """
    Läs- och skrivoperationer mot databasen.

    Alla metoder tar och returnerar pydantic-modeller; ORM-poster
    lämnar aldrig lagret.
    """

    def __init__(self, session: Session):
        self.session = session

    # === Arbetsplatser ===

    def list_workplaces(self) -> list[Workplace]:
        """Alla arbetsplatser sorterade på prioritet."""
        records = (
            self.session.query(WorkplaceRecord)
            .order_by(WorkplaceRecord.priority, WorkplaceRecord.created_at)
            .all()
        )
        return [workplace_from_record(r) for r in records]

    def get_workplace(self, workplace_id: str) -> Workplace:
        return workplace_from_record(self._workplace_record(workplace_id))

    def create_workplace(self, workplace: Workplace) -> Workplace:
        """Sparar en ny arbetsplats sist i prioritetsordningen."""
        count = self.session.query(WorkplaceRecord).count()
        record = WorkplaceRecord(
            id=workplace.id,
            created_at=workplace.created_at,
            **{field: getattr(workplace, field) for field in _WORKPLACE_FIELDS},
        )
        record.priority = count
        self.session.add(record)
        self._commit("create workplace")
        logger.info("Created workplace %s (%s)", workplace.id, workplace.name)
        return workplace_from_record(record)

    def update_workplace(self, workplace_id: str, **changes: Any) -> Workplace:
        record = self._workplace_record(workplace_id)
        for field, value in changes.items():
            if field not in _WORKPLACE_FIELDS:
                raise StorageError(f"Unknown workplace field: {field}")
            setattr(record, field, value)
        self._commit("update workplace")
        return workplace_from_record(record)

    def delete_workplace(self, workplace_id: str) -> int:
        """
        Tar bort en arbetsplats och alla dess pass.

        Returns:
            Antal borttagna pass
        """
        record = self._workplace_record(workplace_id)
        removed = self.session.query(ShiftRecord).filter(ShiftRecord.workplace_id == workplace_id).delete()
        self.session.delete(record)
        self._commit("delete workplace")
        logger.info("Deleted workplace %s and %d shift(s)", workplace_id, removed)
        return removed

    def reorder_workplaces(self, ordered_ids: list[str]) -> list[Workplace]:
        """Sätter prioritet efter listans ordning. Id som saknas i listan hamnar sist."""
        records = {r.id: r for r in self.session.query(WorkplaceRecord).all()}

        unknown = [wid for wid in ordered_ids if wid not in records]
        if unknown:
            raise RecordNotFoundError("Workplace", unknown[0])

        rest = [wid for wid in sorted(records, key=lambda wid: records[wid].priority) if wid not in ordered_ids]
        for priority, wid in enumerate([*ordered_ids, *rest]):
            records[wid].priority = priority

        self._commit("reorder workplaces")
        return self.list_workplaces()

    # === Pass ===

    def list_shifts(
        self,
        start: datetime.date | None = None,
        end: datetime.date | None = None,
    ) -> list[Shift]:
        """Pass sorterade på datum och starttid, valfritt begränsade till [start, end)."""
        query = self.session.query(ShiftRecord)
        if start is not None:
            query = query.filter(ShiftRecord.date >= start)
        if end is not None:
            query = query.filter(ShiftRecord.date < end)
        records = query.order_by(ShiftRecord.date, ShiftRecord.start_time).all()
        return [shift_from_record(r) for r in records]

    def get_shift(self, shift_id: str) -> Shift:
        return shift_from_record(self._shift_record(shift_id))

    def create_shift(self, shift: Shift) -> list[Shift]:
        """
        Sparar ett pass. Ett återkommande pass sparas som en post per förekomst.

        Returns:
            De sparade passen
        """
        occurrences = expand_recurrence(shift)
        records = []
        for occurrence in occurrences:
            record = ShiftRecord(id=occurrence.id, created_at=occurrence.created_at)
            _apply_shift(record, occurrence)
            records.append(record)

        self.session.add_all(records)
        self._commit("create shift")
        return [shift_from_record(r) for r in records]

    def update_shift(self, shift_id: str, **changes: Any) -> Shift:
        record = self._shift_record(shift_id)
        updated = shift_from_record(record).model_copy(
            update={**changes, "updated_at": datetime.datetime.now()}
        )
        _apply_shift(record, updated)
        self._commit("update shift")
        return shift_from_record(record)

    def delete_shift(self, shift_id: str) -> None:
        record = self._shift_record(shift_id)
        self.session.delete(record)
        self._commit("delete shift")

    # === Privata hjälpfunktioner ===

    def _workplace_record(self, workplace_id: str) -> WorkplaceRecord:
        record = self.session.get(WorkplaceRecord, workplace_id)
        if record is None:
            raise RecordNotFoundError("Workplace", workplace_id)
        return record

    def _shift_record(self, shift_id: str) -> ShiftRecord:
        record = self.session.get(ShiftRecord, shift_id)
        if record is None:
            raise RecordNotFoundError("Shift", shift_id)
        return record

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Failed to %s", action)
            raise StorageError(f"Could not {action}: {e}") from e
