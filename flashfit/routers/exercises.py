# flashfit/routers/exercises.py
from fastapi import APIRouter, Query

from ..core.errors import NotFoundError
from ..models import Exercise
from ..schemas import ExerciseOut
from ..services import catalog_service
from ..services.cache_service import cache_get, cache_set, exercises_key
from .auth import current_user, db_dependency

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("")
def list_exercises(
    db: db_dependency,
    muscle_group: str | None = Query(default=None),
    movement_type: str | None = Query(default=None),
):
    key = exercises_key(muscle_group, movement_type)
    exercises = cache_get(key)
    if exercises is None:
        exercises = catalog_service.list_exercises(db, muscle_group, movement_type)
        cache_set(key, exercises)
    return {"success": True, "count": len(exercises), "exercises": exercises}


@router.get("/{exercise_id}")
def get_exercise(exercise_id: int, db: db_dependency):
    exercise = db.query(Exercise).filter(Exercise.id == exercise_id).first()
    if not exercise:
        raise NotFoundError("Exercise not found")
    return {"success": True, "exercise": ExerciseOut.model_validate(exercise).model_dump()}


@router.get("/{exercise_id}/history")
def get_exercise_history(exercise_id: int, db: db_dependency, user: current_user):
    return {"success": True, "history": catalog_service.get_history(db, exercise_id, user["id"])}


@router.get("/{exercise_id}/alternatives")
def get_exercise_alternatives(exercise_id: int, db: db_dependency, user: current_user):
    return {"success": True, "alternatives": catalog_service.get_alternatives(db, exercise_id, user["id"])}
