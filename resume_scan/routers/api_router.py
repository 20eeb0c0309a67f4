from fastapi import APIRouter
from resume_scan.routers import files, resumes

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(resumes.router)
api_router.include_router(files.router)
