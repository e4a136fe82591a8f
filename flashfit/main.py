#main file:
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.errors import ValidationError
from .core.settings import settings
from .database import engine, init_database
from .routers import auth, contact, exercises, programs, store, workout_logs

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("flashfit")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database(engine)
    logger.info("FlashFit API started (environment=%s, prefix=%s)", settings.ENVIRONMENT, settings.API_PREFIX)
    yield
    engine.dispose()


app = FastAPI(title="FlashFit API", version=VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _failure(status_code: int, message: str, headers: dict | None = None, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra}, headers=headers)


_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _field_path(loc) -> str:
    parts = loc[1:] if loc and loc[0] in _LOCATIONS else loc
    return ".".join(str(p) for p in parts)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [{"field": _field_path(err["loc"]), "message": err["msg"]} for err in exc.errors()]
    return _failure(400, "Validation failed", errors=errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc, ValidationError):
        return _failure(exc.status_code, exc.detail, errors=exc.errors)
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _failure(404, "Route not found")
    return _failure(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return _failure(500, "Database error", error=str(exc.orig if getattr(exc, "orig", None) else exc))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    extra = {} if settings.is_production else {"error": str(exc)}
    return _failure(500, "Something went wrong!", **extra)


app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(contact.router, prefix=settings.API_PREFIX)
app.include_router(exercises.router, prefix=settings.API_PREFIX)
app.include_router(programs.router, prefix=settings.API_PREFIX)
app.include_router(workout_logs.router, prefix=settings.API_PREFIX)
app.include_router(store.router, prefix=settings.API_PREFIX)


@app.get(f"{settings.API_PREFIX}/health", tags=["meta"])
async def health():
    return {
        "success": True,
        "message": "FlashFit API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/", tags=["meta"])
async def root():
    p = settings.API_PREFIX
    return {
        "success": True,
        "message": "Welcome to FlashFit API",
        "version": VERSION,
        "endpoints": {
            "health": f"GET {p}/health",
            "auth": {
                "register": f"POST {p}/auth/register",
                "login": f"POST {p}/auth/login",
                "profile": f"GET {p}/auth/profile (requires auth)",
                "updateProfile": f"PUT {p}/auth/profile (requires auth)",
            },
            "contact": {
                "submit": f"POST {p}/contact/submit",
                "getAllSubmissions": f"GET {p}/contact/submissions (requires admin)",
            },
            "exercises": {
                "list": f"GET {p}/exercises",
                "getOne": f"GET {p}/exercises/:id",
                "history": f"GET {p}/exercises/:id/history (requires auth)",
                "alternatives": f"GET {p}/exercises/:id/alternatives (requires auth)",
            },
            "programs": {
                "getAll": f"GET {p}/programs (requires auth)",
                "getOne": f"GET {p}/programs/:id (requires auth)",
                "create": f"POST {p}/programs (requires auth)",
                "copy": f"POST {p}/programs with body copyFromId (requires auth)",
                "update": f"PUT {p}/programs/:id (requires auth)",
                "delete": f"DELETE {p}/programs/:id (requires auth)",
                "sessions": f"POST/PUT/DELETE {p}/programs/:programId/sessions (requires auth)",
                "sessionExercises": f"POST/PUT/DELETE {p}/programs/:programId/sessions/:sessionId/exercises (requires auth)",
            },
            "workoutLogs": {
                "list": f"GET {p}/workout-logs (requires auth)",
                "getOne": f"GET {p}/workout-logs/:id (requires auth)",
                "create": f"POST {p}/workout-logs (requires auth)",
                "update": f"PUT {p}/workout-logs/:id (requires auth)",
                "delete": f"DELETE {p}/workout-logs/:id (requires auth)",
            },
            "store": {
                "list": f"GET {p}/store/programs",
                "getOne": f"GET {p}/store/programs/:id",
                "purchase": f"POST {p}/store/programs/:id/purchase (requires auth)",
                "purchased": f"GET {p}/store/purchased (requires auth)",
            },
        },
    }


def run():
    import uvicorn

    uvicorn.run("flashfit.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
