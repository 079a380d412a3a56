import pytest

from app.core.exceptions import MeetingValidationError
from app.models.meeting import Day
from app.models.semester import Term
from app.services.booking import (
    Booking,
    ProposedMeeting,
    check_conflict,
    format_conflict_message,
    ranges_overlap,
)
from app.utils.wall_time import WallTime

ROOM_ID = "room-md-g115"
ROOM_NAME = "Maxwell Dworkin G115"


def _booking(day, start, end, title="CS 50", room_id=ROOM_ID, year=2026, term=Term.FALL, parent_id="ci-1"):
    return Booking(
        room_id=room_id,
        room_name=ROOM_NAME,
        calendar_year=year,
        term=term,
        day=day,
        start_time=WallTime.parse(start),
        end_time=WallTime.parse(end),
        meeting_title=title,
        parent_id=parent_id,
    )


def _proposed(day, start, end, room_id=ROOM_ID, year=2026, term=Term.FALL):
    return ProposedMeeting(
        day=day,
        start_time=WallTime.parse(start),
        end_time=WallTime.parse(end),
        room_id=room_id,
        calendar_year=year,
        term=term,
    )


def test_identical_slot_conflicts_with_readable_message():
    existing = [_booking(Day.MON, "10:30", "11:45", title="CS 50")]
    proposed = _proposed(Day.MON, "10:30", "11:45")

    conflicts = check_conflict(proposed, existing)

    assert [booking.meeting_title for booking in conflicts] == ["CS 50"]
    message = format_conflict_message(ROOM_NAME, proposed.day, proposed.start_time, proposed.end_time, conflicts)
    assert message == (
        "Maxwell Dworkin G115 is not available on Monday between 10:30 AM - 11:45 AM. CONFLICTS WITH: CS 50"
    )


def test_touching_boundary_is_not_a_conflict():
    existing = [_booking(Day.MON, "10:30", "11:45")]
    assert check_conflict(_proposed(Day.MON, "11:45", "13:00"), existing) == []
    assert check_conflict(_proposed(Day.MON, "09:00", "10:30"), existing) == []


def test_different_day_is_not_a_conflict():
    existing = [_booking(Day.TUE, "09:00", "10:00")]
    assert check_conflict(_proposed(Day.MON, "09:00", "10:00"), existing) == []


@pytest.mark.parametrize(
    "override",
    [
        {"room_id": "room-other"},
        {"year": 2027},
        {"term": Term.SPRING},
    ],
)
def test_other_room_or_semester_is_not_a_conflict(override):
    existing = [_booking(Day.MON, "10:00", "11:00", **override)]
    assert check_conflict(_proposed(Day.MON, "10:00", "11:00"), existing) == []


def test_meeting_without_room_never_conflicts():
    existing = [_booking(Day.MON, "10:00", "11:00")]
    assert check_conflict(_proposed(Day.MON, "10:00", "11:00", room_id=None), existing) == []
    assert check_conflict(_proposed(Day.MON, "10:00", "11:00", room_id=""), existing) == []


def test_every_overlapping_booking_is_reported_in_order():
    existing = [
        _booking(Day.WED, "08:00", "09:15", title="AM 21", parent_id="ci-1"),
        _booking(Day.WED, "09:00", "10:00", title="Faculty Meeting", parent_id="nce-1"),
        _booking(Day.WED, "10:00", "11:00", title="CS 109A", parent_id="ci-2"),
        _booking(Day.WED, "12:00", "13:00", title="CS 22A", parent_id="ci-3"),
    ]
    proposed = _proposed(Day.WED, "09:00", "10:30")

    conflicts = check_conflict(proposed, existing)

    assert [booking.meeting_title for booking in conflicts] == ["AM 21", "Faculty Meeting", "CS 109A"]
    message = format_conflict_message(ROOM_NAME, Day.WED, proposed.start_time, proposed.end_time, conflicts)
    assert message.endswith("CONFLICTS WITH: AM 21, Faculty Meeting, CS 109A")
    assert "Wednesday between 9:00 AM - 10:30 AM" in message


def test_contained_and_enclosing_ranges_conflict():
    existing = [_booking(Day.THU, "13:00", "16:00")]
    assert len(check_conflict(_proposed(Day.THU, "14:00", "15:00"), existing)) == 1
    assert len(check_conflict(_proposed(Day.THU, "12:00", "17:00"), existing)) == 1


@pytest.mark.parametrize(("start", "end"), [("10:00", "10:00"), ("11:00", "10:00")])
def test_start_not_before_end_is_rejected(start, end):
    with pytest.raises(MeetingValidationError):
        check_conflict(_proposed(Day.FRI, start, end), [])


def test_ranges_overlap_is_half_open():
    nine, ten, eleven = WallTime(9, 0), WallTime(10, 0), WallTime(11, 0)
    assert ranges_overlap(nine, eleven, ten, eleven)
    assert not ranges_overlap(nine, ten, ten, eleven)
    assert not ranges_overlap(ten, eleven, nine, ten)
