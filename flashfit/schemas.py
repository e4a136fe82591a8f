from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .enums import RoleEnum, DifficultyEnum


class _Request(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


# auth

class CreateUserRequest(_Request):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: Optional[str] = None


class LoginRequest(_Request):
    email: EmailStr
    password: str = Field(min_length=1)


class UpdateProfileRequest(_Request):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None


class ProfileOut(UserOut):
    role: RoleEnum
    created_at: datetime
    updated_at: datetime


# contact

class ContactSubmissionRequest(_Request):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    message: Optional[str] = None


class ContactSubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime


# exercises

class ExerciseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    muscle_group: str
    movement_type: str
    equipment: Optional[str] = None


# programs

class CreateProgramRequest(_Request):
    name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    copyFromId: Optional[int] = None


class UpdateProgramRequest(_Request):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None


class CreateSessionRequest(_Request):
    name: Optional[str] = Field(default=None, max_length=200)
    sort_order: Optional[int] = Field(default=None, ge=0)


class UpdateSessionRequest(_Request):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    sort_order: Optional[int] = Field(default=None, ge=0)


class AddSessionExerciseRequest(_Request):
    exercise_id: int
    default_sets: int = Field(default=3, gt=0)
    default_reps: int = Field(default=10, gt=0)
    sort_order: Optional[int] = Field(default=None, ge=0)


class UpdateSessionExerciseRequest(_Request):
    exercise_id: Optional[int] = None
    default_sets: Optional[int] = Field(default=None, gt=0)
    default_reps: Optional[int] = Field(default=None, gt=0)
    sort_order: Optional[int] = Field(default=None, ge=0)


class ProgramOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    user_id: Optional[int] = None
    is_preloaded: bool
    created_at: datetime


class SessionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    program_id: int
    name: str
    sort_order: int


class SessionExerciseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    program_session_id: int
    exercise_id: int
    default_sets: int
    default_reps: int
    sort_order: int


# workout logs

class LogSetIn(_Request):
    exercise_id: int
    set_index: Optional[int] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    load: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class CreateWorkoutLogRequest(_Request):
    program_id: Optional[int] = None
    program_session_id: Optional[int] = None
    session_name: Optional[str] = Field(default=None, max_length=200)
    workout_date: Optional[date] = None
    sets: List[LogSetIn] = []


class UpdateWorkoutLogRequest(_Request):
    session_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    workout_date: Optional[date] = None
    sets: Optional[List[LogSetIn]] = None


class WorkoutLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    program_id: Optional[int] = None
    program_session_id: Optional[int] = None
    session_name: str
    workout_date: date
    created_at: datetime


# store

class StoreProgramOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    price: float
    duration_weeks: Optional[int] = None
    difficulty: Optional[DifficultyEnum] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
