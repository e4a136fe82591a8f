# flashfit/services/seed.py
import logging

from sqlalchemy.orm import Session

from ..enums import DifficultyEnum
from ..models import Exercise, WorkoutProgram, ProgramSession, ProgramSessionExercise, StoreProgram

logger = logging.getLogger(__name__)

EXERCISES = [
    ("Barbell Bench Press", "chest", "push", "barbell"),
    ("Dumbbell Bench Press", "chest", "push", "dumbbell"),
    ("Push-ups", "chest", "push", "bodyweight"),
    ("Incline Dumbbell Press", "chest", "push", "dumbbell"),
    ("Cable Fly", "chest", "push", "cable"),
    ("Barbell Back Squat", "quads", "squat", "barbell"),
    ("Leg Press", "quads", "squat", "machine"),
    ("Leg Extension", "quads", "extension", "machine"),
    ("Romanian Deadlift", "hamstrings", "hinge", "barbell"),
    ("Leg Curl", "hamstrings", "curl", "machine"),
    ("Barbell Row", "back", "pull", "barbell"),
    ("Pull-ups", "back", "pull", "bodyweight"),
    ("Lat Pulldown", "back", "pull", "cable"),
    ("Dumbbell Row", "back", "pull", "dumbbell"),
    ("Overhead Press", "shoulders", "push", "barbell"),
    ("Dumbbell Shoulder Press", "shoulders", "push", "dumbbell"),
    ("Lateral Raise", "shoulders", "isolation", "dumbbell"),
    ("Barbell Curl", "biceps", "pull", "barbell"),
    ("Hammer Curl", "biceps", "pull", "dumbbell"),
    ("Triceps Pushdown", "triceps", "push", "cable"),
    ("Skull Crusher", "triceps", "push", "barbell"),
    ("Deadlift", "back", "hinge", "barbell"),
    ("Calf Raise", "calves", "isolation", "machine"),
]

PRELOADED_PROGRAMS = [
    ("Full Body Beginner", "Three days per week, full body each session.", ["Day A", "Day B", "Day C"]),
    ("Push / Pull / Legs", "Classic PPL split, 6 days per week.", ["Push", "Pull", "Legs"]),
    ("Upper / Lower", "Four days per week, upper and lower split.", ["Upper", "Lower"]),
]
EXERCISES_PER_SESSION = 4

STORE_PROGRAMS = [
    {
        "title": "Beginner Full Body Transformation",
        "description": "Perfect for beginners starting their fitness journey. Build strength and endurance with guided workouts.",
        "price": 29.99,
        "duration_weeks": 8,
        "difficulty": DifficultyEnum.beginner,
        "category": "strength",
    },
    {
        "title": "Advanced HIIT Masterclass",
        "description": "High-intensity interval training to burn fat and boost metabolism. For experienced athletes.",
        "price": 49.99,
        "duration_weeks": 12,
        "difficulty": DifficultyEnum.advanced,
        "category": "cardio",
    },
    {
        "title": "Yoga Flow & Flexibility",
        "description": "Improve flexibility, reduce stress, and find balance with daily yoga practices.",
        "price": 24.99,
        "duration_weeks": 6,
        "difficulty": DifficultyEnum.intermediate,
        "category": "yoga",
    },
    {
        "title": "Muscle Building Blueprint",
        "description": "Comprehensive bodybuilding program with progressive overload and nutrition guidance.",
        "price": 59.99,
        "duration_weeks": 16,
        "difficulty": DifficultyEnum.intermediate,
        "category": "bodybuilding",
    },
]


def seed_exercises(db: Session) -> int:
    existing = {name for (name,) in db.query(Exercise.name).all()}
    added = 0
    for name, muscle_group, movement_type, equipment in EXERCISES:
        if name in existing:
            continue
        db.add(Exercise(name=name, muscle_group=muscle_group, movement_type=movement_type, equipment=equipment))
        added += 1
    db.commit()
    return added


def seed_preloaded_programs(db: Session) -> int:
    """Insert the shared templates unless any preloaded program already exists."""
    if db.query(WorkoutProgram.id).filter(WorkoutProgram.is_preloaded.is_(True)).first():
        return 0
    exercise_ids = [eid for (eid,) in db.query(Exercise.id).order_by(Exercise.id).all()]
    if not exercise_ids:
        return 0

    for name, description, session_names in PRELOADED_PROGRAMS:
        program = WorkoutProgram(name=name, description=description, user_id=None, is_preloaded=True)
        for sess_index, session_name in enumerate(session_names):
            session = ProgramSession(name=session_name, sort_order=sess_index)
            for order in range(EXERCISES_PER_SESSION):
                session.exercises.append(
                    ProgramSessionExercise(
                        exercise_id=exercise_ids[(sess_index * 2 + order) % len(exercise_ids)],
                        default_sets=3,
                        default_reps=10,
                        sort_order=order,
                    )
                )
            program.sessions.append(session)
        db.add(program)
    db.commit()
    return len(PRELOADED_PROGRAMS)


def seed_store_programs(db: Session) -> int:
    existing = {title for (title,) in db.query(StoreProgram.title).all()}
    added = 0
    for data in STORE_PROGRAMS:
        if data["title"] in existing:
            continue
        db.add(StoreProgram(**data))
        added += 1
    db.commit()
    return added


def seed_all(db: Session) -> None:
    exercises = seed_exercises(db)
    programs = seed_preloaded_programs(db)
    store = seed_store_programs(db)
    logger.info("Seeded %d exercises, %d preloaded programs, %d store programs", exercises, programs, store)
