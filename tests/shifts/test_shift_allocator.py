from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

import pytest

from src.shiftboard.shiftboard.core.enums import Role
from src.shiftboard.shiftboard.core.exceptions import (
    ForbiddenError,
    InvalidFormatError,
    NotFoundError,
    OverlappingShiftError,
    PastBookingError,
    TooShortError,
)
from src.shiftboard.shiftboard.employees.model import Employee
from src.shiftboard.shiftboard.shifts.memory_shift_repository import InMemoryShiftRepository
from src.shiftboard.shiftboard.shifts.model import ShiftFilters
from src.shiftboard.shiftboard.shifts.service import ShiftAllocator

NOW = datetime(2030, 1, 1, 8, 0)
TOMORROW = "2030-01-02"

ALICE = Employee(employee_id="emp-alice", name="Alice", employee_code="EMP001", department="Engineering")
BOB = Employee(employee_id="emp-bob", name="Bob", employee_code="EMP002", department="Sales")


@dataclass
class InMemoryEmployees:
    by_id: dict[str, Employee] = field(default_factory=lambda: {ALICE.employee_id: ALICE, BOB.employee_id: BOB})

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def get_summaries(self, employee_ids):
        return {i: self.by_id[i].summary() for i in employee_ids if i in self.by_id}

    def list_all(self):
        return list(self.by_id.values())


class RecordingShifts(InMemoryShiftRepository):
    def __init__(self):
        super().__init__()
        self.queries: list[ShiftFilters] = []

    def list_filtered(self, filters):
        self.queries.append(filters)
        return super().list_filtered(filters)


def _allocator(shifts=None):
    return ShiftAllocator(shifts or InMemoryShiftRepository(), InMemoryEmployees(), clock=lambda: NOW)


def _book(allocator, employee_id=ALICE.employee_id, day=TOMORROW, start="09:00", end="17:00"):
    return allocator.create_shift(employee_id=employee_id, work_date=day, start_time=start, end_time=end)


def test_create_shift_returns_shift_joined_with_employee():
    view = _book(_allocator())

    assert view.shift.employee_id == ALICE.employee_id
    assert view.shift.work_date == date(2030, 1, 2)
    assert view.shift.start_time == time(9, 0)
    assert view.shift.end_time == time(17, 0)
    assert view.shift.shift_id
    assert view.employee.employee_code == "EMP001"

    data = view.to_dict()
    assert data["date"] == TOMORROW
    assert data["startTime"] == "09:00"
    assert data["employee"] == {
        "id": "emp-alice",
        "name": "Alice",
        "employeeCode": "EMP001",
        "department": "Engineering",
    }


def test_create_shift_rejects_short_shift():
    with pytest.raises(TooShortError):
        _book(_allocator(), start="09:00", end="12:00")


def test_create_shift_accepts_exactly_minimum_duration():
    assert _book(_allocator(), start="09:00", end="13:00").shift.start_time == time(9, 0)


def test_equal_start_and_end_is_too_short():
    with pytest.raises(TooShortError):
        _book(_allocator(), start="09:00", end="09:00")


def test_create_shift_rejects_past_start():
    allocator = _allocator()
    with pytest.raises(PastBookingError):
        allocator.create_shift(
            employee_id=ALICE.employee_id,
            work_date="2030-01-01",
            start_time="07:59",
            end_time="12:00",
        )


def test_start_equal_to_now_is_not_past():
    view = _allocator().create_shift(
        employee_id=ALICE.employee_id, work_date="2030-01-01", start_time="08:00", end_time="12:00"
    )
    assert view.shift.start_time == time(8, 0)


def test_explicit_now_overrides_clock():
    allocator = _allocator()
    with pytest.raises(PastBookingError):
        allocator.create_shift(
            employee_id=ALICE.employee_id,
            work_date=TOMORROW,
            start_time="09:00",
            end_time="17:00",
            now=datetime(2030, 1, 2, 9, 1),
        )


def test_past_check_runs_before_duration_check():
    with pytest.raises(PastBookingError):
        _allocator().create_shift(
            employee_id=ALICE.employee_id, work_date="2029-12-31", start_time="09:00", end_time="10:00"
        )


@pytest.mark.parametrize(
    "day,start,end",
    [("2030/01/02", "09:00", "17:00"), (TOMORROW, "9:00", "17:00"), (TOMORROW, "09:00", "24:00")],
)
def test_create_shift_rejects_malformed_input(day, start, end):
    with pytest.raises(InvalidFormatError):
        _book(_allocator(), day=day, start=start, end=end)


def test_missing_employee_id_is_invalid():
    with pytest.raises(InvalidFormatError):
        _book(_allocator(), employee_id="")


def test_unknown_employee_is_not_found_and_nothing_is_stored():
    shifts = InMemoryShiftRepository()
    with pytest.raises(NotFoundError):
        _book(_allocator(shifts), employee_id="emp-ghost")
    assert shifts.list_filtered(ShiftFilters()) == []


def test_second_overlapping_booking_fails():
    allocator = _allocator()
    _book(allocator, start="09:00", end="17:00")

    with pytest.raises(OverlappingShiftError):
        _book(allocator, start="12:00", end="18:00")


def test_back_to_back_bookings_are_allowed():
    allocator = _allocator()
    _book(allocator, start="09:00", end="13:00")
    _book(allocator, start="13:00", end="17:00")

    views = allocator.list_shifts(caller_role=Role.ADMIN, caller_employee_id="emp-admin")
    assert [v.shift.start_time for v in views] == [time(9, 0), time(13, 0)]


def test_overnight_booking_blocks_early_morning_of_same_date():
    allocator = _allocator()
    _book(allocator, start="22:00", end="02:00")

    with pytest.raises(OverlappingShiftError):
        _book(allocator, start="00:30", end="05:00")


def test_overlap_is_checked_per_employee_and_date():
    allocator = _allocator()
    _book(allocator, start="09:00", end="17:00")

    _book(allocator, employee_id=BOB.employee_id, start="09:00", end="17:00")
    _book(allocator, day="2030-01-03", start="09:00", end="17:00")


def test_user_listing_is_pinned_to_own_employee_even_with_other_filter():
    shifts = RecordingShifts()
    allocator = _allocator(shifts)
    _book(allocator, employee_id=ALICE.employee_id)
    _book(allocator, employee_id=BOB.employee_id)

    views = allocator.list_shifts(
        caller_role="user",
        caller_employee_id=ALICE.employee_id,
        filters=ShiftFilters(employee_id=BOB.employee_id),
    )

    assert [v.shift.employee_id for v in views] == [ALICE.employee_id]
    assert shifts.queries[-1].employee_id == ALICE.employee_id


def test_admin_listing_honours_filters():
    allocator = _allocator()
    _book(allocator, employee_id=ALICE.employee_id)
    _book(allocator, employee_id=BOB.employee_id)
    _book(allocator, employee_id=BOB.employee_id, day="2030-01-03")

    everyone = allocator.list_shifts(caller_role=Role.ADMIN, caller_employee_id="emp-admin")
    only_bob = allocator.list_shifts(
        caller_role=Role.ADMIN, caller_employee_id="emp-admin", filters=ShiftFilters(employee_id=BOB.employee_id)
    )
    bob_on_day = allocator.list_shifts(
        caller_role=Role.ADMIN,
        caller_employee_id="emp-admin",
        filters=ShiftFilters(employee_id=BOB.employee_id, work_date=date(2030, 1, 3)),
    )

    assert len(everyone) == 3
    assert {v.shift.employee_id for v in only_bob} == {BOB.employee_id}
    assert len(only_bob) == 2
    assert [v.shift.work_date for v in bob_on_day] == [date(2030, 1, 3)]


def test_listing_is_sorted_by_date_then_start_with_stable_ties():
    allocator = _allocator()
    late = _book(allocator, employee_id=ALICE.employee_id, day="2030-01-03", start="08:00", end="12:00")
    first_tie = _book(allocator, employee_id=ALICE.employee_id, start="14:00", end="18:00")
    second_tie = _book(allocator, employee_id=BOB.employee_id, start="14:00", end="18:00")
    early = _book(allocator, employee_id=BOB.employee_id, start="06:00", end="10:00")

    views = allocator.list_shifts(caller_role=Role.ADMIN, caller_employee_id="emp-admin")

    assert [v.shift.shift_id for v in views] == [
        early.shift.shift_id,
        first_tie.shift.shift_id,
        second_tie.shift.shift_id,
        late.shift.shift_id,
    ]


def test_unknown_role_is_forbidden():
    with pytest.raises(ForbiddenError):
        _allocator().list_shifts(caller_role="manager", caller_employee_id=ALICE.employee_id)


def test_user_cannot_delete_someone_elses_shift():
    allocator = _allocator()
    view = _book(allocator, employee_id=BOB.employee_id)

    with pytest.raises(ForbiddenError):
        allocator.delete_shift(shift_id=view.shift.shift_id, caller_role=Role.USER, caller_employee_id=ALICE.employee_id)

    assert len(allocator.list_shifts(caller_role=Role.ADMIN, caller_employee_id="emp-admin")) == 1


def test_owner_can_delete_own_shift():
    allocator = _allocator()
    view = _book(allocator)

    allocator.delete_shift(shift_id=view.shift.shift_id, caller_role=Role.USER, caller_employee_id=ALICE.employee_id)

    assert allocator.list_shifts(caller_role=Role.USER, caller_employee_id=ALICE.employee_id) == []


def test_admin_can_delete_any_shift():
    allocator = _allocator()
    view = _book(allocator, employee_id=BOB.employee_id)

    allocator.delete_shift(shift_id=view.shift.shift_id, caller_role=Role.ADMIN, caller_employee_id="emp-admin")

    assert allocator.list_shifts(caller_role=Role.ADMIN, caller_employee_id="emp-admin") == []


def test_delete_unknown_shift_is_not_found():
    with pytest.raises(NotFoundError):
        _allocator().delete_shift(shift_id="missing", caller_role=Role.ADMIN, caller_employee_id="emp-admin")


def test_deleted_slot_can_be_booked_again():
    allocator = _allocator()
    view = _book(allocator)
    allocator.delete_shift(shift_id=view.shift.shift_id, caller_role=Role.ADMIN, caller_employee_id="emp-admin")

    assert _book(allocator).shift.shift_id != view.shift.shift_id
