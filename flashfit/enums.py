from enum import Enum


class RoleEnum(str, Enum):
    admin = "admin"
    member = "member"


class ProgramKind(str, Enum):
    """Preloaded programs are shared and read-only; owned ones belong to one user."""
    preloaded = "preloaded"
    owned = "owned"


class DifficultyEnum(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class PurchaseStatusEnum(str, Enum):
    active = "active"
    cancelled = "cancelled"
