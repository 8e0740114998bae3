import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from enrollment.api import auth, chat, courses, document_requirements, documents, form_fields, form_steps, students
from enrollment.api.errors import describe_errors
from enrollment.config import settings
from enrollment.services.auth import bootstrap_admin
from enrollment.services.enrollment_store import EnrollmentStore
from enrollment.services.form_engine import FormConfigurationEngine

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


def bootstrap():
    """One-time startup work: default admin account and default configuration."""
    store = EnrollmentStore.get_instance()
    bootstrap_admin(store)

    if not settings.seed_defaults_on_startup:
        return
    engine = FormConfigurationEngine.get_instance()
    if engine.is_empty():
        seeded = engine.seed_defaults()
        logger.info(f"Seeded default form configuration: {seeded}")
    store.seed_default_courses()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting enrollment service (storage backend: {settings.storage_backend})")
    bootstrap()
    yield


app = FastAPI(
    title="Enrollment Service",
    description="Student enrollment with an admin-configurable registration form",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": describe_errors(exc.errors())})


# Include routers
app.include_router(auth.router, tags=["auth"])
app.include_router(form_fields.router, tags=["form-fields"])
app.include_router(form_fields.admin_router, tags=["form-fields"])
app.include_router(document_requirements.router, tags=["document-requirements"])
app.include_router(document_requirements.admin_router, tags=["document-requirements"])
app.include_router(form_steps.router, tags=["form-steps"])
app.include_router(students.router, tags=["students"])
app.include_router(students.admin_router, tags=["students"])
app.include_router(documents.router, tags=["documents"])
app.include_router(documents.admin_router, tags=["documents"])
app.include_router(chat.router, tags=["chat"])
app.include_router(courses.router, tags=["courses"])
app.include_router(courses.admin_router, tags=["courses"])


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "storage_backend": settings.storage_backend,
    }
