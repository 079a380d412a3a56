from datetime import time

from app.models.meeting import Day


def test_schedule_rejects_unknown_term(client, seeded):
    response = client.get("/api/course-instances/schedule", params={"term": "SUMMER", "year": 2026})
    assert response.status_code == 400
    assert response.json()["detail"] == '"term" must be "FALL" or "SPRING"'


def test_schedule_for_unknown_semester_is_empty(client, seeded):
    response = client.get("/api/course-instances/schedule", params={"term": "FALL", "year": 1999})
    assert response.status_code == 200
    assert response.json() == []


def test_schedule_groups_courses_and_skips_non_seas(client, seeded, add_meeting):
    for instance_id in (seeded.instances.cs50, seeded.instances.cs109a):
        add_meeting(
            day=Day.MON,
            start=time(9, 0),
            end=time(10, 15),
            room_id=seeded.rooms.md_g115 if instance_id == seeded.instances.cs50 else None,
            course_instance_id=instance_id,
        )
    add_meeting(day=Day.MON, start=time(9, 0), end=time(10, 15), course_instance_id=seeded.instances.am21)
    add_meeting(day=Day.MON, start=time(9, 0), end=time(10, 15), course_instance_id=seeded.instances.ec10)
    add_meeting(day=Day.MON, start=time(9, 0), end=time(10, 15), course_instance_id=seeded.instances.cs50_spring)

    response = client.get("/api/course-instances/schedule", params={"term": "FALL", "year": 2026})

    assert response.status_code == 200
    blocks = response.json()
    assert [block["id"] for block in blocks] == ["AMMON09001015FALL2026", "CSMON09001015FALL2026"]
    cs_block = blocks[1]
    assert cs_block["coursePrefix"] == "CS"
    assert cs_block["weekday"] == "MON"
    assert (cs_block["startHour"], cs_block["startMinute"], cs_block["endHour"], cs_block["endMinute"]) == (
        9,
        0,
        10,
        15,
    )
    assert cs_block["duration"] == 75
    assert cs_block["courses"] == [
        {
            "id": seeded.instances.cs109a,
            "courseNumber": "109A",
            "room": None,
            "campus": None,
            "isUndergraduate": True,
        },
        {
            "id": seeded.instances.cs50,
            "courseNumber": "50",
            "room": "Maxwell Dworkin G115",
            "campus": "Cambridge",
            "isUndergraduate": True,
        },
    ]


def test_room_schedule_lists_course_meetings_with_instructors(
    client, seeded, add_meeting, assign_instructor
):
    assign_instructor(seeded.instances.cs109a, seeded.faculty.protopapas, order=1)
    assign_instructor(seeded.instances.cs109a, seeded.faculty.malan, order=0)
    add_meeting(
        day=Day.WED,
        start=time(13, 30),
        end=time(14, 45),
        room_id=seeded.rooms.md_g115,
        course_instance_id=seeded.instances.cs109a,
    )
    add_meeting(
        day=Day.MON,
        start=time(13, 30),
        end=time(14, 45),
        room_id=seeded.rooms.md_g115,
        course_instance_id=seeded.instances.cs109a,
    )
    add_meeting(
        day=Day.MON,
        start=time(9, 0),
        end=time(10, 0),
        room_id=seeded.rooms.md_g115,
        non_class_event_id=seeded.events.faculty_meeting,
    )

    response = client.get(
        f"/api/rooms/{seeded.rooms.md_g115}/schedule",
        params={"term": "FALL", "calendarYear": 2026},
    )

    assert response.status_code == 200
    blocks = response.json()
    assert [(block["weekday"], block["catalogNumber"]) for block in blocks] == [
        ("MON", "CS 109A"),
        ("WED", "CS 109A"),
    ]
    assert blocks[0]["id"] == "CS109AMON13301445FALL2026"
    assert blocks[0]["title"] == "Data Science 1"
    assert blocks[0]["duration"] == 75
    assert [
        (instructor["displayName"], instructor["instructorOrder"]) for instructor in blocks[0]["instructors"]
    ] == [("Malan, David", 0), ("Protopapas, Pavlos", 1)]
    assert blocks[0]["instructors"][0]["notes"] == "Prefers Mondays"


def test_room_schedule_unknown_room(client, seeded):
    response = client.get("/api/rooms/missing/schedule", params={"term": "FALL", "calendarYear": 2026})
    assert response.status_code == 404


def test_room_schedule_rejects_unknown_term(client, seeded):
    response = client.get(
        f"/api/rooms/{seeded.rooms.md_g115}/schedule",
        params={"term": "fall", "calendarYear": 2026},
    )
    assert response.status_code == 400
