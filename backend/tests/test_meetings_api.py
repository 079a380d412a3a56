from datetime import time

from app.models.meeting import Day, Meeting


def _meeting(day="MON", start="10:30", end="11:45", room_id=None, meeting_id=None):
    payload = {"day": day, "startTime": start, "endTime": end, "roomId": room_id}
    if meeting_id:
        payload["id"] = meeting_id
    return payload


def test_save_and_list_meetings(client, seeded):
    response = client.put(
        f"/api/meetings/{seeded.instances.cs50}",
        json={
            "meetings": [
                _meeting(day="WED", start="10:30", end="11:45", room_id=seeded.rooms.md_g115),
                _meeting(day="MON", start="10:30", end="11:45", room_id=seeded.rooms.md_g115),
                _meeting(day="FRI", start="13:00", end="14:00"),
            ]
        },
    )
    assert response.status_code == 200
    saved = response.json()
    assert [item["day"] for item in saved] == ["MON", "WED", "FRI"]
    assert saved[0]["startTime"] == "10:30:00"
    assert saved[0]["endTime"] == "11:45:00"
    assert saved[0]["room"] == {
        "id": seeded.rooms.md_g115,
        "name": "Maxwell Dworkin G115",
        "campus": "Cambridge",
    }
    assert saved[2]["room"] is None

    listed = client.get(f"/api/meetings/{seeded.instances.cs50}")
    assert listed.status_code == 200
    assert listed.json() == saved


def test_conflicting_room_is_rejected_with_message(client, seeded, add_meeting):
    add_meeting(
        day=Day.MON,
        start=time(10, 30),
        end=time(11, 45),
        room_id=seeded.rooms.md_g115,
        course_instance_id=seeded.instances.cs50,
    )

    response = client.put(
        f"/api/meetings/{seeded.instances.cs109a}",
        json={"meetings": [_meeting(room_id=seeded.rooms.md_g115)]},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == (
        "Maxwell Dworkin G115 is not available on Monday between 10:30 AM - 11:45 AM. CONFLICTS WITH: CS 50"
    )
    assert body["details"] == {"conflicts": ["CS 50"]}
    assert client.get(f"/api/meetings/{seeded.instances.cs109a}").json() == []


def test_touching_meetings_are_accepted(client, seeded, add_meeting):
    add_meeting(
        day=Day.MON,
        start=time(10, 30),
        end=time(11, 45),
        room_id=seeded.rooms.md_g115,
        course_instance_id=seeded.instances.cs50,
    )

    response = client.put(
        f"/api/meetings/{seeded.instances.cs109a}",
        json={"meetings": [_meeting(start="11:45", end="13:00", room_id=seeded.rooms.md_g115)]},
    )

    assert response.status_code == 200


def test_event_booking_blocks_course_meeting(client, seeded, add_meeting):
    add_meeting(
        day=Day.TUE,
        start=time(16, 0),
        end=time(17, 30),
        room_id=seeded.rooms.md_119,
        non_class_event_id=seeded.events.faculty_meeting,
    )

    response = client.put(
        f"/api/meetings/{seeded.instances.cs22a}",
        json={"meetings": [_meeting(day="TUE", start="17:00", end="18:00", room_id=seeded.rooms.md_119)]},
    )

    assert response.status_code == 400
    assert response.json()["message"].endswith("CONFLICTS WITH: Faculty Meeting")


def test_resaving_does_not_conflict_with_itself(client, seeded):
    url = f"/api/meetings/{seeded.instances.am21}"
    first = client.put(url, json={"meetings": [_meeting(day="THU", room_id=seeded.rooms.sec_1321)]})
    assert first.status_code == 200
    meeting_id = first.json()[0]["id"]

    second = client.put(
        url,
        json={
            "meetings": [
                _meeting(day="THU", start="10:00", end="11:45", room_id=seeded.rooms.sec_1321, meeting_id=meeting_id)
            ]
        },
    )

    assert second.status_code == 200
    assert second.json()[0]["id"] == meeting_id
    assert second.json()[0]["startTime"] == "10:00:00"


def test_overlapping_meetings_in_one_request_are_rejected(client, seeded, db_session):
    response = client.put(
        f"/api/meetings/{seeded.instances.cs50}",
        json={
            "meetings": [
                _meeting(start="10:00", end="11:00", room_id=seeded.rooms.md_g115),
                _meeting(start="10:30", end="11:30", room_id=seeded.rooms.md_g115),
            ]
        },
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == (
        "Maxwell Dworkin G115 is not available on Monday between 10:30 AM - 11:30 AM. CONFLICTS WITH: CS 50"
    )
    assert body["details"] == {"conflicts": ["CS 50"]}
    db_session.expire_all()
    assert db_session.query(Meeting).count() == 0


def test_meetings_in_one_request_may_share_time_in_other_rooms(client, seeded):
    response = client.put(
        f"/api/meetings/{seeded.instances.cs50}",
        json={
            "meetings": [
                _meeting(start="10:00", end="11:00", room_id=seeded.rooms.md_g115),
                _meeting(start="10:30", end="11:30", room_id=seeded.rooms.md_119),
                _meeting(start="11:00", end="12:00", room_id=seeded.rooms.md_g115),
                _meeting(start="10:30", end="11:30"),
            ]
        },
    )

    assert response.status_code == 200
    assert len(response.json()) == 4


def test_milliseconds_are_kept(client, seeded):
    url = f"/api/meetings/{seeded.instances.cs50}"
    response = client.put(url, json={"meetings": [_meeting(start="10:00:00.500", end="11:15")]})

    assert response.status_code == 200
    assert response.json()[0]["startTime"] == "10:00:00.500"
    assert client.get(url).json()[0]["startTime"] == "10:00:00.500"


def test_meetings_left_out_are_deleted(client, seeded, db_session):
    url = f"/api/meetings/{seeded.instances.cs50}"
    client.put(url, json={"meetings": [_meeting(day="MON"), _meeting(day="WED")]})

    response = client.put(url, json={"meetings": []})

    assert response.status_code == 200
    assert response.json() == []
    db_session.expire_all()
    assert db_session.query(Meeting).count() == 0


def test_unknown_meeting_id_is_not_found(client, seeded):
    response = client.put(
        f"/api/meetings/{seeded.instances.cs50}",
        json={"meetings": [_meeting(meeting_id="does-not-exist")]},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Meeting with id does-not-exist not found"


def test_unknown_parent_is_not_found(client, seeded):
    response = client.put("/api/meetings/missing-parent", json={"meetings": []})
    assert response.status_code == 404


def test_unknown_room_is_not_found(client, seeded):
    response = client.put(
        f"/api/meetings/{seeded.instances.cs50}",
        json={"meetings": [_meeting(room_id="missing-room")]},
    )
    assert response.status_code == 404


def test_start_after_end_is_rejected(client, seeded):
    response = client.put(
        f"/api/meetings/{seeded.instances.cs50}",
        json={"meetings": [_meeting(start="12:00", end="11:00")]},
    )
    assert response.status_code == 400
    assert response.json()["details"]["errors"] == ["startTime must occur before endTime"]


def test_malformed_time_fails_request_validation(client, seeded):
    response = client.put(
        f"/api/meetings/{seeded.instances.cs50}",
        json={"meetings": [_meeting(start="9am")]},
    )
    assert response.status_code == 422


def test_deleting_course_instance_removes_its_meetings(client, seeded, db_session):
    client.put(
        f"/api/meetings/{seeded.instances.cs109a}",
        json={"meetings": [_meeting(room_id=seeded.rooms.md_g115)]},
    )

    response = client.delete(f"/api/course-instances/{seeded.instances.cs109a}")

    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.query(Meeting).count() == 0
    freed = client.put(
        f"/api/meetings/{seeded.instances.cs50}",
        json={"meetings": [_meeting(room_id=seeded.rooms.md_g115)]},
    )
    assert freed.status_code == 200


def test_deleting_non_class_parent_removes_event_meetings(client, seeded, db_session):
    client.put(
        f"/api/meetings/{seeded.events.faculty_meeting}",
        json={"meetings": [_meeting(day="FRI", start="15:00", end="16:00", room_id=seeded.rooms.md_119)]},
    )

    response = client.delete(f"/api/non-class-parents/{seeded.non_class_parents.faculty_meeting}")

    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.query(Meeting).count() == 0
