#models file:
from datetime import datetime, UTC

from sqlalchemy import (
    Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import relationship

from .database import Base
from .enums import RoleEnum, ProgramKind, DifficultyEnum, PurchaseStatusEnum


def _now():
    return datetime.now(UTC)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    phone = Column(String(30))
    role = Column(SqlEnum(RoleEnum, name="role_enum"), nullable=False, default=RoleEnum.member)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, nullable=False)

    programs = relationship("WorkoutProgram", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    workout_logs = relationship("WorkoutLog", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    purchases = relationship("UserProgram", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)


class Exercise(Base):
    __tablename__ = "exercises"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    muscle_group = Column(String(50), index=True, nullable=False)
    movement_type = Column(String(50), index=True, nullable=False)
    equipment = Column(String(50))


class WorkoutProgram(Base):
    __tablename__ = "workout_programs"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, default="")
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    is_preloaded = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)

    owner = relationship("User", back_populates="programs")
    sessions = relationship(
        "ProgramSession",
        back_populates="program",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProgramSession.sort_order",
    )

    @property
    def kind(self) -> ProgramKind:
        return ProgramKind.preloaded if self.is_preloaded else ProgramKind.owned

    def is_visible_to(self, user_id: int) -> bool:
        return self.kind is ProgramKind.preloaded or self.user_id == user_id

    def is_editable_by(self, user_id: int) -> bool:
        return self.kind is ProgramKind.owned and self.user_id == user_id


class ProgramSession(Base):
    __tablename__ = "program_sessions"
    id = Column(Integer, primary_key=True, index=True)
    program_id = Column(Integer, ForeignKey("workout_programs.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)

    program = relationship("WorkoutProgram", back_populates="sessions")
    exercises = relationship(
        "ProgramSessionExercise",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProgramSessionExercise.sort_order",
    )


class ProgramSessionExercise(Base):
    __tablename__ = "program_session_exercises"
    id = Column(Integer, primary_key=True, index=True)
    program_session_id = Column(Integer, ForeignKey("program_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id"), nullable=False)
    default_sets = Column(Integer, nullable=False, default=3)
    default_reps = Column(Integer, nullable=False, default=10)
    sort_order = Column(Integer, nullable=False, default=0)

    session = relationship("ProgramSession", back_populates="exercises")
    exercise = relationship("Exercise")


class WorkoutLog(Base):
    __tablename__ = "workout_logs"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    program_id = Column(Integer, ForeignKey("workout_programs.id", ondelete="SET NULL"), nullable=True)
    program_session_id = Column(Integer, ForeignKey("program_sessions.id", ondelete="SET NULL"), nullable=True)
    session_name = Column(String(200), nullable=False, default="Workout")
    workout_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)

    user = relationship("User", back_populates="workout_logs")
    sets = relationship(
        "WorkoutLogSet",
        back_populates="workout_log",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkoutLogSet.set_index",
    )


class WorkoutLogSet(Base):
    __tablename__ = "workout_log_sets"
    id = Column(Integer, primary_key=True, index=True)
    workout_log_id = Column(Integer, ForeignKey("workout_logs.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id"), nullable=False, index=True)
    set_index = Column(Integer, nullable=False)
    reps = Column(Integer)
    load = Column(Float)
    notes = Column(Text)

    workout_log = relationship("WorkoutLog", back_populates="sets")
    exercise = relationship("Exercise")


class ContactSubmission(Base):
    __tablename__ = "contact_submissions"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(30))
    message = Column(Text)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)


class StoreProgram(Base):
    __tablename__ = "store_programs"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), unique=True, nullable=False)
    description = Column(Text)
    price = Column(Float, nullable=False)
    duration_weeks = Column(Integer)
    difficulty = Column(SqlEnum(DifficultyEnum, name="difficulty_enum"))
    category = Column(String(50), index=True)
    image_url = Column(String)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)


class UserProgram(Base):
    __tablename__ = "user_programs"
    __table_args__ = (UniqueConstraint("user_id", "program_id", name="uq_user_program"),)
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    program_id = Column(Integer, ForeignKey("store_programs.id", ondelete="CASCADE"), nullable=False)
    purchase_date = Column(DateTime(timezone=True), default=_now, nullable=False)
    status = Column(SqlEnum(PurchaseStatusEnum, name="purchase_status_enum"), nullable=False, default=PurchaseStatusEnum.active)

    user = relationship("User", back_populates="purchases")
    program = relationship("StoreProgram")
