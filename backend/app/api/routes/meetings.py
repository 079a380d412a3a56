from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.models.meeting import Meeting
from app.schemas.meeting import MeetingListRequest, MeetingResponse, MeetingRoom
from app.services.meetings import list_meetings, save_meetings
from app.utils.wall_time import WallTime

router = APIRouter()


def to_meeting_response(meeting: Meeting) -> MeetingResponse:
    room = None
    if meeting.room is not None:
        room = MeetingRoom(id=meeting.room.id, name=meeting.room.display_name, campus=meeting.room.campus_name)
    return MeetingResponse(
        id=meeting.id,
        day=meeting.day,
        startTime=WallTime.from_time(meeting.start_time).to_request_string(),
        endTime=WallTime.from_time(meeting.end_time).to_request_string(),
        room=room,
    )


@router.get("/{parent_id}", response_model=list[MeetingResponse])
def get_meetings(parent_id: str, db: Session = Depends(get_db)) -> list[MeetingResponse]:
    return [to_meeting_response(meeting) for meeting in list_meetings(db, parent_id)]


@router.put("/{parent_id}", response_model=list[MeetingResponse])
def replace_meetings(
    parent_id: str,
    payload: MeetingListRequest,
    db: Session = Depends(get_db),
) -> list[MeetingResponse]:
    """Create, update, or remove the meetings of a course instance or non-class event.

    Meetings left out of ``payload.meetings`` are deleted; an empty list removes
    them all. A booked room answers 400 with the conflicting meeting titles.
    """
    return [to_meeting_response(meeting) for meeting in save_meetings(db, parent_id, payload.meetings)]
