from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# HTTP client debug logs off
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import (
    assessment_types, attendance, auth, class_offerings, class_sessions,
    courses, enrolments, grades, grades_attendance, instructors,
    people, students, teaching_assignments, terms,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS (admin console / student / instructor frontends)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ request latency (X-Latency-Ms response header)
app.add_middleware(TimingMiddleware, log_requests=settings.REQUEST_LOG)

# ✅ global error handlers ({"error": "..."} bodies)
add_error_handlers(app)

# ✅ resources under the API prefix
app.include_router(people.router,               prefix=settings.API_PREFIX)
app.include_router(students.router,             prefix=settings.API_PREFIX)
app.include_router(instructors.router,          prefix=settings.API_PREFIX)
app.include_router(courses.router,              prefix=settings.API_PREFIX)
app.include_router(terms.router,                prefix=settings.API_PREFIX)
app.include_router(class_offerings.router,      prefix=settings.API_PREFIX)
app.include_router(teaching_assignments.router, prefix=settings.API_PREFIX)
app.include_router(class_sessions.router,       prefix=settings.API_PREFIX)
app.include_router(enrolments.router,           prefix=settings.API_PREFIX)
app.include_router(attendance.router,           prefix=settings.API_PREFIX)
app.include_router(assessment_types.router,     prefix=settings.API_PREFIX)
app.include_router(grades.router,               prefix=settings.API_PREFIX)
app.include_router(grades_attendance.router,    prefix=settings.API_PREFIX)   # legacy

# ✅ identity lookup (student / instructor homepage sign-in)
app.include_router(auth.router)


# ✅ health check
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


@app.get("/")
def root():
    return {"message": settings.APP_TITLE}
