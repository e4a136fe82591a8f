# flashfit/routers/programs.py
import logging

from fastapi import APIRouter, status
from sqlalchemy import or_

from ..core.errors import NotFoundError
from ..models import Exercise, WorkoutProgram, ProgramSession, ProgramSessionExercise
from ..schemas import (
    CreateProgramRequest, UpdateProgramRequest, CreateSessionRequest, UpdateSessionRequest,
    AddSessionExerciseRequest, UpdateSessionExerciseRequest, ProgramOut, SessionOut, SessionExerciseOut,
)
from ..services.program_service import (
    get_visible_program, get_editable_program, get_program_session,
    next_session_order, next_exercise_order, build_program_detail, copy_program,
)
from .auth import current_user, db_dependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/programs", tags=["programs"])


@router.get("")
def list_programs(db: db_dependency, user: current_user):
    rows = (
        db.query(WorkoutProgram)
        .filter(or_(WorkoutProgram.is_preloaded.is_(True), WorkoutProgram.user_id == user["id"]))
        .order_by(WorkoutProgram.is_preloaded.desc(), WorkoutProgram.name, WorkoutProgram.id)
        .all()
    )
    programs = [ProgramOut.model_validate(p).model_dump() for p in rows]
    return {
        "success": True,
        "programs": programs,
        "preloaded": [p for p in programs if p["is_preloaded"]],
        "myPrograms": [p for p in programs if not p["is_preloaded"]],
    }


@router.get("/{program_id}")
def get_program(program_id: int, db: db_dependency, user: current_user):
    program = get_visible_program(db, program_id, user["id"])
    return {"success": True, "program": build_program_detail(db, program)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_program(body: CreateProgramRequest, db: db_dependency, user: current_user):
    if body.copyFromId is not None:
        source = get_visible_program(db, body.copyFromId, user["id"], detail="Program to copy not found")
        program = copy_program(db, source, user["id"])
        db.commit()
        db.refresh(program)
        logger.info("User %s copied program %s into %s", user["id"], source.id, program.id)
        return {"success": True, "message": "Program copied", "program": build_program_detail(db, program)}

    program = WorkoutProgram(
        name=body.name or "My Program",
        description=body.description or "",
        user_id=user["id"],
        is_preloaded=False,
    )
    db.add(program)
    db.commit()
    db.refresh(program)
    return {"success": True, "program": {**ProgramOut.model_validate(program).model_dump(), "sessions": []}}


@router.put("/{program_id}")
def update_program(program_id: int, body: UpdateProgramRequest, db: db_dependency, user: current_user):
    program = get_editable_program(db, program_id, user["id"])
    if body.name is not None:
        program.name = body.name
    if body.description is not None:
        program.description = body.description
    db.commit()
    db.refresh(program)
    return {"success": True, "message": "Program updated", "program": ProgramOut.model_validate(program).model_dump()}


@router.delete("/{program_id}")
def delete_program(program_id: int, db: db_dependency, user: current_user):
    program = get_editable_program(db, program_id, user["id"], action="delete")
    db.delete(program)
    db.commit()
    return {"success": True, "message": "Program deleted"}


# sessions

@router.post("/{program_id}/sessions", status_code=status.HTTP_201_CREATED)
def add_session(program_id: int, body: CreateSessionRequest, db: db_dependency, user: current_user):
    program = get_editable_program(db, program_id, user["id"])
    session = ProgramSession(
        program_id=program.id,
        name=body.name or "New Session",
        sort_order=body.sort_order if body.sort_order is not None else next_session_order(db, program.id),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return {"success": True, "session": SessionOut.model_validate(session).model_dump()}


@router.put("/{program_id}/sessions/{session_id}")
def update_session(program_id: int, session_id: int, body: UpdateSessionRequest, db: db_dependency, user: current_user):
    program = get_editable_program(db, program_id, user["id"])
    session = get_program_session(db, program, session_id)
    if body.name is not None:
        session.name = body.name
    if body.sort_order is not None:
        session.sort_order = body.sort_order
    db.commit()
    db.refresh(session)
    return {"success": True, "message": "Session updated", "session": SessionOut.model_validate(session).model_dump()}


@router.delete("/{program_id}/sessions/{session_id}")
def delete_session(program_id: int, session_id: int, db: db_dependency, user: current_user):
    program = get_editable_program(db, program_id, user["id"])
    session = get_program_session(db, program, session_id)
    db.delete(session)
    db.commit()
    return {"success": True, "message": "Session deleted"}


# session exercises

def _get_session_exercise(db, session: ProgramSession, entry_id: int) -> ProgramSessionExercise:
    entry = (
        db.query(ProgramSessionExercise)
        .filter(ProgramSessionExercise.id == entry_id, ProgramSessionExercise.program_session_id == session.id)
        .first()
    )
    if not entry:
        raise NotFoundError("Session exercise not found")
    return entry


def _require_exercise(db, exercise_id: int) -> None:
    if not db.query(Exercise.id).filter(Exercise.id == exercise_id).first():
        raise NotFoundError("Exercise not found")


@router.post("/{program_id}/sessions/{session_id}/exercises", status_code=status.HTTP_201_CREATED)
def add_session_exercise(
    program_id: int, session_id: int, body: AddSessionExerciseRequest, db: db_dependency, user: current_user,
):
    program = get_editable_program(db, program_id, user["id"])
    session = get_program_session(db, program, session_id)
    _require_exercise(db, body.exercise_id)
    entry = ProgramSessionExercise(
        program_session_id=session.id,
        exercise_id=body.exercise_id,
        default_sets=body.default_sets,
        default_reps=body.default_reps,
        sort_order=body.sort_order if body.sort_order is not None else next_exercise_order(db, session.id),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return {"success": True, "program_session_exercise": SessionExerciseOut.model_validate(entry).model_dump()}


@router.put("/{program_id}/sessions/{session_id}/exercises/{entry_id}")
def update_session_exercise(
    program_id: int, session_id: int, entry_id: int, body: UpdateSessionExerciseRequest,
    db: db_dependency, user: current_user,
):
    program = get_editable_program(db, program_id, user["id"])
    session = get_program_session(db, program, session_id)
    entry = _get_session_exercise(db, session, entry_id)
    if body.exercise_id is not None:
        _require_exercise(db, body.exercise_id)
        entry.exercise_id = body.exercise_id
    if body.default_sets is not None:
        entry.default_sets = body.default_sets
    if body.default_reps is not None:
        entry.default_reps = body.default_reps
    if body.sort_order is not None:
        entry.sort_order = body.sort_order
    db.commit()
    db.refresh(entry)
    return {
        "success": True,
        "message": "Exercise updated",
        "program_session_exercise": SessionExerciseOut.model_validate(entry).model_dump(),
    }


@router.delete("/{program_id}/sessions/{session_id}/exercises/{entry_id}")
def remove_session_exercise(
    program_id: int, session_id: int, entry_id: int, db: db_dependency, user: current_user,
):
    program = get_editable_program(db, program_id, user["id"])
    session = get_program_session(db, program, session_id)
    entry = _get_session_exercise(db, session, entry_id)
    db.delete(entry)
    db.commit()
    return {"success": True, "message": "Exercise removed from session"}
