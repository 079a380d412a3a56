"""create course planner schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    term = sa.Enum("FALL", "SPRING", name="term")
    is_seas = sa.Enum("Y", "N", "EPS", name="is_seas")
    day = sa.Enum("MON", "TUE", "WED", "THU", "FRI", name="day")

    op.create_table(
        "campuses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_campuses_name", "campuses", ["name"], unique=True)

    op.create_table(
        "buildings",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("campus_id", sa.String(length=36), sa.ForeignKey("campuses.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_buildings_name", "buildings", ["name"], unique=True)

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("building_id", sa.String(length=36), sa.ForeignKey("buildings.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("building_id", "name", name="uq_rooms_building_name"),
    )

    op.create_table(
        "semesters",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("calendar_year", sa.Integer(), nullable=False),
        sa.Column("term", term, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("calendar_year", "term", name="uq_semesters_year_term"),
    )
    op.create_index("ix_semesters_calendar_year", "semesters", ["calendar_year"])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("prefix", sa.String(length=20), nullable=False),
        sa.Column("number", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("is_undergraduate", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_seas", is_seas, nullable=False, server_default="Y"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("prefix", "number", name="uq_courses_prefix_number"),
    )
    op.create_index("ix_courses_prefix", "courses", ["prefix"])

    op.create_table(
        "course_instances",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "course_id",
            sa.String(length=36),
            sa.ForeignKey("courses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("semester_id", sa.String(length=36), sa.ForeignKey("semesters.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("course_id", "semester_id", name="uq_course_instances_course_semester"),
    )

    op.create_table(
        "faculty",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("huid", sa.String(length=20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_faculty_huid", "faculty", ["huid"], unique=True)

    op.create_table(
        "faculty_course_instances",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "faculty_id",
            sa.String(length=36),
            sa.ForeignKey("faculty.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "course_instance_id",
            sa.String(length=36),
            sa.ForeignKey("course_instances.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("instructor_order", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("faculty_id", "course_instance_id", name="uq_faculty_course_instances_pair"),
    )

    op.create_table(
        "non_class_parents",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("contact_name", sa.String(length=200), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "non_class_events",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "non_class_parent_id",
            sa.String(length=36),
            sa.ForeignKey("non_class_parents.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("semester_id", sa.String(length=36), sa.ForeignKey("semesters.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "meetings",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("day", day, nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column(
            "room_id",
            sa.String(length=36),
            sa.ForeignKey("rooms.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "course_instance_id",
            sa.String(length=36),
            sa.ForeignKey("course_instances.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "non_class_event_id",
            sa.String(length=36),
            sa.ForeignKey("non_class_events.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "(course_instance_id IS NULL) <> (non_class_event_id IS NULL)",
            name="ck_meetings_single_owner",
        ),
        sa.CheckConstraint("start_time < end_time", name="ck_meetings_start_before_end"),
    )
    op.create_index("ix_meetings_course_instance_id", "meetings", ["course_instance_id"])
    op.create_index("ix_meetings_non_class_event_id", "meetings", ["non_class_event_id"])
    op.create_index("ix_meetings_room_id", "meetings", ["room_id"])


def downgrade() -> None:
    op.drop_index("ix_meetings_room_id", table_name="meetings")
    op.drop_index("ix_meetings_non_class_event_id", table_name="meetings")
    op.drop_index("ix_meetings_course_instance_id", table_name="meetings")
    op.drop_table("meetings")
    op.drop_table("non_class_events")
    op.drop_table("non_class_parents")
    op.drop_table("faculty_course_instances")
    op.drop_index("ix_faculty_huid", table_name="faculty")
    op.drop_table("faculty")
    op.drop_table("course_instances")
    op.drop_index("ix_courses_prefix", table_name="courses")
    op.drop_table("courses")
    op.drop_index("ix_semesters_calendar_year", table_name="semesters")
    op.drop_table("semesters")
    op.drop_table("rooms")
    op.drop_index("ix_buildings_name", table_name="buildings")
    op.drop_table("buildings")
    op.drop_index("ix_campuses_name", table_name="campuses")
    op.drop_table("campuses")

    bind = op.get_bind()
    sa.Enum(name="day").drop(bind, checkfirst=True)
    sa.Enum(name="is_seas").drop(bind, checkfirst=True)
    sa.Enum(name="term").drop(bind, checkfirst=True)
