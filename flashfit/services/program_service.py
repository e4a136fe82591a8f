# flashfit/services/program_service.py
"""
Ownership rules and tree operations for workout programs.

A program is either preloaded (shared, read-only) or owned by exactly one
user. Programs a caller cannot see are reported as missing, so a stranger's
program is indistinguishable from one that does not exist.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.errors import ForbiddenError, NotFoundError
from ..models import Exercise, WorkoutProgram, ProgramSession, ProgramSessionExercise
from ..schemas import ProgramOut, SessionOut


def get_visible_program(db: Session, program_id: int, user_id: int, detail: str = "Program not found") -> WorkoutProgram:
    program = db.query(WorkoutProgram).filter(WorkoutProgram.id == program_id).first()
    if not program or not program.is_visible_to(user_id):
        raise NotFoundError(detail)
    return program


def get_editable_program(db: Session, program_id: int, user_id: int, action: str = "edit") -> WorkoutProgram:
    program = get_visible_program(db, program_id, user_id)
    if not program.is_editable_by(user_id):
        raise ForbiddenError(f"Not allowed to {action} this program")
    return program


def get_program_session(db: Session, program: WorkoutProgram, session_id: int) -> ProgramSession:
    session = (
        db.query(ProgramSession)
        .filter(ProgramSession.id == session_id, ProgramSession.program_id == program.id)
        .first()
    )
    if not session:
        raise NotFoundError("Session not found")
    return session


def next_session_order(db: Session, program_id: int) -> int:
    current = db.query(func.max(ProgramSession.sort_order)).filter(ProgramSession.program_id == program_id).scalar()
    return 0 if current is None else current + 1


def next_exercise_order(db: Session, session_id: int) -> int:
    current = (
        db.query(func.max(ProgramSessionExercise.sort_order))
        .filter(ProgramSessionExercise.program_session_id == session_id)
        .scalar()
    )
    return 0 if current is None else current + 1


def build_program_detail(db: Session, program: WorkoutProgram) -> dict:
    sessions = (
        db.query(ProgramSession)
        .filter(ProgramSession.program_id == program.id)
        .order_by(ProgramSession.sort_order, ProgramSession.id)
        .all()
    )
    by_session = {s.id: {**SessionOut.model_validate(s).model_dump(), "exercises": []} for s in sessions}

    if by_session:
        rows = (
            db.query(ProgramSessionExercise, Exercise)
            .join(Exercise, Exercise.id == ProgramSessionExercise.exercise_id)
            .filter(ProgramSessionExercise.program_session_id.in_(list(by_session)))
            .order_by(
                ProgramSessionExercise.program_session_id,
                ProgramSessionExercise.sort_order,
                ProgramSessionExercise.id,
            )
            .all()
        )
        for entry, exercise in rows:
            by_session[entry.program_session_id]["exercises"].append({
                "id": entry.id,
                "exercise_id": entry.exercise_id,
                "exercise_name": exercise.name,
                "muscle_group": exercise.muscle_group,
                "movement_type": exercise.movement_type,
                "default_sets": entry.default_sets,
                "default_reps": entry.default_reps,
                "sort_order": entry.sort_order,
            })

    return {
        **ProgramOut.model_validate(program).model_dump(),
        "kind": program.kind.value,
        "sessions": [by_session[s.id] for s in sessions],
    }


def copy_program(db: Session, source: WorkoutProgram, user_id: int) -> WorkoutProgram:
    """Deep-clone source into a new program owned by user_id. Caller commits."""
    clone = WorkoutProgram(
        name=f"{source.name} (Copy)",
        description=source.description or "",
        user_id=user_id,
        is_preloaded=False,
    )
    sessions = (
        db.query(ProgramSession)
        .filter(ProgramSession.program_id == source.id)
        .order_by(ProgramSession.sort_order, ProgramSession.id)
        .all()
    )
    for session in sessions:
        session_copy = ProgramSession(name=session.name, sort_order=session.sort_order)
        entries = (
            db.query(ProgramSessionExercise)
            .filter(ProgramSessionExercise.program_session_id == session.id)
            .order_by(ProgramSessionExercise.sort_order, ProgramSessionExercise.id)
            .all()
        )
        for entry in entries:
            session_copy.exercises.append(
                ProgramSessionExercise(
                    exercise_id=entry.exercise_id,
                    default_sets=entry.default_sets,
                    default_reps=entry.default_reps,
                    sort_order=entry.sort_order,
                )
            )
        clone.sessions.append(session_copy)
    db.add(clone)
    return clone
