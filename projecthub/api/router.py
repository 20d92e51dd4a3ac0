"""Centralized API router registration.

Groups:
- Auth: register, login, current user.
- Projects: metadata, collaborators, documentation/code file, versions.
"""

from fastapi import APIRouter

from projecthub.routers import auth, collaborators, documentation, projects, versions

api_router = APIRouter()

api_router.include_router(auth.router)

# Project resources; every route below is guarded by the project access gate
api_router.include_router(projects.router)
api_router.include_router(collaborators.router)
api_router.include_router(documentation.router)
api_router.include_router(versions.router)
