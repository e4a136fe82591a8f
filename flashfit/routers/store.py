# flashfit/routers/store.py
from fastapi import APIRouter, Query, status
from sqlalchemy.exc import IntegrityError

from ..core.errors import ConflictError, NotFoundError
from ..enums import DifficultyEnum, PurchaseStatusEnum
from ..models import StoreProgram, UserProgram
from ..schemas import StoreProgramOut
from ..services.events import publish_event
from .auth import current_user, db_dependency

router = APIRouter(prefix="/store", tags=["store"])

ALREADY_PURCHASED = "You have already purchased this program"


@router.get("/programs")
def list_store_programs(
    db: db_dependency,
    category: str | None = Query(default=None),
    difficulty: DifficultyEnum | None = Query(default=None),
    min_price: float | None = Query(default=None, alias="minPrice"),
    max_price: float | None = Query(default=None, alias="maxPrice"),
):
    query = db.query(StoreProgram)
    if category:
        query = query.filter(StoreProgram.category == category)
    if difficulty:
        query = query.filter(StoreProgram.difficulty == difficulty)
    if min_price is not None:
        query = query.filter(StoreProgram.price >= min_price)
    if max_price is not None:
        query = query.filter(StoreProgram.price <= max_price)
    rows = query.order_by(StoreProgram.created_at.desc(), StoreProgram.id.desc()).all()
    return {"success": True, "count": len(rows), "programs": [StoreProgramOut.model_validate(r).model_dump() for r in rows]}


@router.get("/programs/{program_id}")
def get_store_program(program_id: int, db: db_dependency):
    program = db.query(StoreProgram).filter(StoreProgram.id == program_id).first()
    if not program:
        raise NotFoundError("Program not found")
    return {"success": True, "program": StoreProgramOut.model_validate(program).model_dump()}


@router.post("/programs/{program_id}/purchase", status_code=status.HTTP_201_CREATED)
def purchase_program(program_id: int, db: db_dependency, user: current_user):
    program = db.query(StoreProgram).filter(StoreProgram.id == program_id).first()
    if not program:
        raise NotFoundError("Program not found")

    existing = (
        db.query(UserProgram.id)
        .filter(UserProgram.user_id == user["id"], UserProgram.program_id == program.id)
        .first()
    )
    if existing:
        raise ConflictError(ALREADY_PURCHASED)

    purchase = UserProgram(user_id=user["id"], program_id=program.id, status=PurchaseStatusEnum.active)
    db.add(purchase)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(ALREADY_PURCHASED)
    db.refresh(purchase)

    publish_event(
        "program.purchased",
        {"purchase_id": purchase.id, "user_id": user["id"], "program_id": program.id, "price": program.price},
    )

    return {
        "success": True,
        "message": "Program purchased successfully!",
        "purchase": {
            "id": purchase.id,
            "programId": program.id,
            "programTitle": program.title,
            "price": program.price,
        },
    }


@router.get("/purchased")
def list_purchased_programs(db: db_dependency, user: current_user):
    rows = (
        db.query(UserProgram, StoreProgram)
        .join(StoreProgram, StoreProgram.id == UserProgram.program_id)
        .filter(UserProgram.user_id == user["id"])
        .order_by(UserProgram.purchase_date.desc(), UserProgram.id.desc())
        .all()
    )
    programs = [
        {
            "purchase_id": purchase.id,
            "purchase_date": purchase.purchase_date,
            "status": purchase.status,
            **StoreProgramOut.model_validate(program).model_dump(),
        }
        for purchase, program in rows
    ]
    return {"success": True, "count": len(programs), "programs": programs}
