from app.models.course import Course, CourseInstance, IsSEAS  # noqa: F401
from app.models.faculty import Faculty, FacultyCourseInstance  # noqa: F401
from app.models.meeting import DAY_ORDER, Day, Meeting  # noqa: F401
from app.models.non_class_event import NonClassEvent, NonClassParent  # noqa: F401
from app.models.room import Building, Campus, Room  # noqa: F401
from app.models.semester import Semester, Term  # noqa: F401
