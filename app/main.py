"""Anini Admin - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import ServerSelectionTimeoutError

from app.config import settings
from app.db import db_shutdown, db_startup
from app.seed import seed_admin
from app.services.institute import get_or_create_settings
from app.api import auth, students, batches, attendance, payments, study_tracking, settings as settings_api
from app.api.deps import get_current_user

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await db_startup()
        await seed_admin()
        await get_or_create_settings()
    except ServerSelectionTimeoutError as e:
        logger.error("MongoDB is not reachable at %s", settings.mongodb_url)
        raise RuntimeError("MongoDB connection failed. Start MongoDB and check MONGODB_URL.") from e
    yield
    await db_shutdown()


app = FastAPI(
    title=settings.app_name,
    description="Learning-center administration: students, batches, attendance, study tracking, payments",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_authenticated = [Depends(get_current_user)]

# API routes
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(students.router, prefix="/api/students", tags=["Students"], dependencies=_authenticated)
app.include_router(batches.router, prefix="/api/batches", tags=["Batches"], dependencies=_authenticated)
app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"], dependencies=_authenticated)
app.include_router(payments.router, prefix="/api/payments", tags=["Payments"], dependencies=_authenticated)
app.include_router(study_tracking.router, prefix="/api/study-tracking", tags=["Study Tracking"], dependencies=_authenticated)
app.include_router(settings_api.router, prefix="/api/settings", tags=["Settings"], dependencies=_authenticated)


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.app_name}
