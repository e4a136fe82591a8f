# flashfit/services/catalog_service.py
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError
from ..models import Exercise, WorkoutLog, WorkoutLogSet
from ..schemas import ExerciseOut


def list_exercises(db: Session, muscle_group: str | None = None, movement_type: str | None = None) -> list[dict]:
    query = db.query(Exercise)
    if muscle_group:
        query = query.filter(Exercise.muscle_group == muscle_group)
    if movement_type:
        query = query.filter(Exercise.movement_type == movement_type)
    return [ExerciseOut.model_validate(e).model_dump() for e in query.order_by(Exercise.name).all()]


def get_alternatives(db: Session, exercise_id: int, user_id: int) -> list[dict]:
    """Exercises sharing a muscle group or movement type, with the caller's last set on each."""
    exercise = db.query(Exercise).filter(Exercise.id == exercise_id).first()
    if not exercise:
        raise NotFoundError("Exercise not found")

    alternatives = (
        db.query(Exercise)
        .filter(
            or_(Exercise.muscle_group == exercise.muscle_group, Exercise.movement_type == exercise.movement_type),
            Exercise.id != exercise.id,
        )
        .order_by(Exercise.name)
        .all()
    )
    if not alternatives:
        return []

    rows = (
        db.query(WorkoutLogSet.exercise_id, WorkoutLogSet.load, WorkoutLogSet.reps, WorkoutLog.workout_date)
        .join(WorkoutLog, WorkoutLog.id == WorkoutLogSet.workout_log_id)
        .filter(WorkoutLog.user_id == user_id, WorkoutLogSet.exercise_id.in_([a.id for a in alternatives]))
        .order_by(
            WorkoutLog.workout_date.desc(),
            WorkoutLog.created_at.desc(),
            WorkoutLog.id.desc(),
            WorkoutLogSet.set_index.desc(),
        )
        .all()
    )
    latest = {}
    for ex_id, load, reps, workout_date in rows:
        latest.setdefault(ex_id, {"last_load": load, "last_reps": reps, "last_date": workout_date})

    empty = {"last_load": None, "last_reps": None, "last_date": None}
    return [{**ExerciseOut.model_validate(a).model_dump(), **latest.get(a.id, empty)} for a in alternatives]


def get_history(db: Session, exercise_id: int, user_id: int) -> list[dict]:
    rows = (
        db.query(WorkoutLog, WorkoutLogSet)
        .join(WorkoutLogSet, WorkoutLogSet.workout_log_id == WorkoutLog.id)
        .filter(WorkoutLogSet.exercise_id == exercise_id, WorkoutLog.user_id == user_id)
        .order_by(
            WorkoutLog.workout_date.desc(),
            WorkoutLog.created_at.desc(),
            WorkoutLog.id.desc(),
            WorkoutLogSet.set_index,
        )
        .all()
    )
    by_workout = {}
    for log, log_set in rows:
        group = by_workout.setdefault(log.id, {
            "workout_log_id": log.id,
            "session_name": log.session_name,
            "workout_date": log.workout_date,
            "created_at": log.created_at,
            "sets": [],
        })
        group["sets"].append({
            "set_id": log_set.id,
            "set_index": log_set.set_index,
            "reps": log_set.reps,
            "load": log_set.load,
            "notes": log_set.notes,
        })
    return list(by_workout.values())
