#routers.auth file:
import logging
from datetime import timedelta, datetime, UTC
from typing import Annotated

from fastapi import Depends, APIRouter, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import AuthError, ConflictError, ForbiddenError, NotFoundError
from ..core.settings import settings
from ..database import get_db
from ..enums import RoleEnum
from ..models import User
from ..schemas import CreateUserRequest, LoginRequest, UpdateProfileRequest, UserOut, ProfileOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)
token_jwt = Annotated[str | None, Depends(oauth2_scheme)]

bcryptcontext = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

db_dependency = Annotated[Session, Depends(get_db)]

INVALID_CREDENTIALS = "Invalid email or password"


def authenticate_user(email: str, password: str, db: Session):
    user_model = db.query(User).filter(User.email == email).first()
    if not user_model or not bcryptcontext.verify(password, user_model.hashed_password):
        return False
    return user_model


def create_access_token(email: str, id: int, role: str, expires_delta: timedelta):
    to_encode = {"email": email, "id": id, "role": role}
    expires_time = datetime.now(UTC) + expires_delta
    to_encode.update({"exp": expires_time})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def issue_token(user_model: User) -> str:
    return create_access_token(
        user_model.email,
        user_model.id,
        RoleEnum(user_model.role).value,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


async def get_current_user(token: token_jwt):
    if not token:
        raise AuthError("Access denied. No token provided.")
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthError("Invalid or expired token.")
    email: str = payload.get("email")
    user_id: int = payload.get("id")
    role: str = payload.get("role") or RoleEnum.member.value
    if not email or not user_id:
        raise AuthError("Invalid or expired token.")
    return {"email": email, "id": user_id, "role": role}


current_user = Annotated[dict, Depends(get_current_user)]


async def require_admin(user: current_user):
    if user["role"] != RoleEnum.admin.value:
        raise ForbiddenError("Administrator access required")
    return user


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(db: db_dependency, user: CreateUserRequest):
    email = user.email.lower()
    if db.query(User.id).filter(User.email == email).first():
        raise ConflictError("User with this email already exists")

    admin_emails = {e.lower() for e in settings.ADMIN_EMAILS}
    user_model = User(
        name=user.name,
        email=email,
        hashed_password=bcryptcontext.hash(user.password),
        phone=user.phone,
        role=RoleEnum.admin if email in admin_emails else RoleEnum.member,
    )
    db.add(user_model)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User with this email already exists")
    db.refresh(user_model)
    logger.info("Registered user id=%s role=%s", user_model.id, user_model.role.value)

    return {
        "success": True,
        "message": "User registered successfully",
        "token": issue_token(user_model),
        "user": UserOut.model_validate(user_model).model_dump(),
    }


@router.post("/login")
def login_for_access_token(db: db_dependency, credentials: LoginRequest):
    user_model = authenticate_user(credentials.email.lower(), credentials.password, db)
    if not user_model:
        raise AuthError(INVALID_CREDENTIALS)
    return {
        "success": True,
        "message": "Login successful",
        "token": issue_token(user_model),
        "user": UserOut.model_validate(user_model).model_dump(),
    }


@router.get("/profile")
def get_profile(db: db_dependency, user: current_user):
    user_model = db.query(User).filter(User.id == user["id"]).first()
    if not user_model:
        raise NotFoundError("User not found")
    return {"success": True, "user": ProfileOut.model_validate(user_model).model_dump()}


@router.put("/profile")
def update_profile(db: db_dependency, profile: UpdateProfileRequest, user: current_user):
    user_model = db.query(User).filter(User.id == user["id"]).first()
    if not user_model:
        raise NotFoundError("User not found")

    if profile.name is not None:
        user_model.name = profile.name
    if "phone" in profile.model_fields_set:
        user_model.phone = profile.phone
    user_model.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(user_model)

    return {
        "success": True,
        "message": "Profile updated successfully",
        "user": ProfileOut.model_validate(user_model).model_dump(),
    }
