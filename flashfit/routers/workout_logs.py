# flashfit/routers/workout_logs.py
from datetime import date

from fastapi import APIRouter, Query, status

from ..core.errors import NotFoundError
from ..models import WorkoutLog
from ..schemas import CreateWorkoutLogRequest, UpdateWorkoutLogRequest, WorkoutLogOut
from ..services.log_service import (
    get_owned_log, check_set_exercises, resolve_program_refs, add_sets, replace_sets, build_log_detail,
)
from .auth import current_user, db_dependency

router = APIRouter(prefix="/workout-logs", tags=["workout-logs"])


@router.get("")
def list_workout_logs(
    db: db_dependency,
    user: current_user,
    from_date: date | None = Query(default=None, alias="from"),
    to_date: date | None = Query(default=None, alias="to"),
    program_id: int | None = Query(default=None),
):
    query = db.query(WorkoutLog).filter(WorkoutLog.user_id == user["id"])
    if from_date:
        query = query.filter(WorkoutLog.workout_date >= from_date)
    if to_date:
        query = query.filter(WorkoutLog.workout_date <= to_date)
    if program_id is not None:
        query = query.filter(WorkoutLog.program_id == program_id)
    rows = query.order_by(WorkoutLog.workout_date.desc(), WorkoutLog.created_at.desc(), WorkoutLog.id.desc()).all()
    return {
        "success": True,
        "count": len(rows),
        "workout_logs": [WorkoutLogOut.model_validate(r).model_dump() for r in rows],
    }


@router.get("/{log_id}")
def get_workout_log(log_id: int, db: db_dependency, user: current_user):
    log = get_owned_log(db, log_id, user["id"])
    return {"success": True, "workout_log": build_log_detail(db, log)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_workout_log(body: CreateWorkoutLogRequest, db: db_dependency, user: current_user):
    check_set_exercises(db, body.sets)
    program_id, session_id = resolve_program_refs(db, user["id"], body.program_id, body.program_session_id)

    log = WorkoutLog(
        user_id=user["id"],
        program_id=program_id,
        program_session_id=session_id,
        session_name=body.session_name or "Workout",
        workout_date=body.workout_date or date.today(),
    )
    db.add(log)
    db.flush()
    add_sets(db, log, body.sets)
    db.commit()
    db.refresh(log)
    return {"success": True, "workout_log": WorkoutLogOut.model_validate(log).model_dump()}


@router.put("/{log_id}")
def update_workout_log(log_id: int, body: UpdateWorkoutLogRequest, db: db_dependency, user: current_user):
    log = get_owned_log(db, log_id, user["id"])
    if body.sets is not None:
        check_set_exercises(db, body.sets)

    if body.session_name is not None:
        log.session_name = body.session_name
    if body.workout_date is not None:
        log.workout_date = body.workout_date
    if body.sets is not None:
        replace_sets(db, log, body.sets)
    db.commit()
    db.refresh(log)
    return {"success": True, "message": "Workout log updated", "workout_log": build_log_detail(db, log)}


@router.delete("/{log_id}")
def delete_workout_log(log_id: int, db: db_dependency, user: current_user):
    deleted = (
        db.query(WorkoutLog)
        .filter(WorkoutLog.id == log_id, WorkoutLog.user_id == user["id"])
        .delete(synchronize_session=False)
    )
    db.commit()
    if not deleted:
        raise NotFoundError("Workout log not found")
    return {"success": True, "message": "Workout log deleted"}
