# Student view analytics backend entrypoint: a small FastAPI app.

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api import student_view
from backend.app.core.logging import setup_logger
from backend.app.core.settings import get_settings

settings = get_settings()
setup_logger("backend", settings.log_level)

app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(student_view.router)


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}
