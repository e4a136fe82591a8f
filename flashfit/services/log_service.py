# flashfit/services/log_service.py
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError, ValidationError
from ..models import Exercise, ProgramSession, WorkoutLog, WorkoutLogSet
from ..schemas import LogSetIn, WorkoutLogOut
from .program_service import get_visible_program


def get_owned_log(db: Session, log_id: int, user_id: int) -> WorkoutLog:
    log = db.query(WorkoutLog).filter(WorkoutLog.id == log_id, WorkoutLog.user_id == user_id).first()
    if not log:
        raise NotFoundError("Workout log not found")
    return log


def check_set_exercises(db: Session, sets: list[LogSetIn]) -> None:
    wanted = {s.exercise_id for s in sets}
    if not wanted:
        return
    known = {eid for (eid,) in db.query(Exercise.id).filter(Exercise.id.in_(wanted)).all()}
    errors = [
        {"field": f"sets.{i}.exercise_id", "message": f"Unknown exercise id {s.exercise_id}"}
        for i, s in enumerate(sets)
        if s.exercise_id not in known
    ]
    if errors:
        raise ValidationError(errors=errors)


def resolve_program_refs(db: Session, user_id: int, program_id: int | None, session_id: int | None) -> tuple[int | None, int | None]:
    if program_id is not None:
        get_visible_program(db, program_id, user_id)
    if session_id is None:
        return program_id, None

    session = db.query(ProgramSession).filter(ProgramSession.id == session_id).first()
    if not session or not session.program.is_visible_to(user_id):
        raise NotFoundError("Session not found")
    if program_id is not None and session.program_id != program_id:
        raise ValidationError(errors=[{
            "field": "program_session_id",
            "message": "Session does not belong to the given program",
        }])
    return session.program_id, session.id


def replace_sets(db: Session, log: WorkoutLog, sets: list[LogSetIn]) -> None:
    """Swap every set of log for the given list. Caller commits."""
    db.query(WorkoutLogSet).filter(WorkoutLogSet.workout_log_id == log.id).delete(synchronize_session=False)
    add_sets(db, log, sets)


def add_sets(db: Session, log: WorkoutLog, sets: list[LogSetIn]) -> None:
    for position, s in enumerate(sets):
        db.add(WorkoutLogSet(
            workout_log_id=log.id,
            exercise_id=s.exercise_id,
            set_index=s.set_index if s.set_index is not None else position,
            reps=s.reps,
            load=s.load,
            notes=s.notes,
        ))


def build_log_detail(db: Session, log: WorkoutLog) -> dict:
    rows = (
        db.query(WorkoutLogSet, Exercise.name)
        .join(Exercise, Exercise.id == WorkoutLogSet.exercise_id)
        .filter(WorkoutLogSet.workout_log_id == log.id)
        .order_by(WorkoutLogSet.exercise_id, WorkoutLogSet.set_index, WorkoutLogSet.id)
        .all()
    )
    by_exercise = {}
    for log_set, exercise_name in rows:
        group = by_exercise.setdefault(log_set.exercise_id, {
            "exercise_id": log_set.exercise_id,
            "exercise_name": exercise_name,
            "sets": [],
        })
        group["sets"].append({
            "id": log_set.id,
            "set_index": log_set.set_index,
            "reps": log_set.reps,
            "load": log_set.load,
            "notes": log_set.notes,
        })
    return {**WorkoutLogOut.model_validate(log).model_dump(), "exercises": list(by_exercise.values())}
