from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from projecthub.core.database import get_db
from projecthub.modules.projects.access import (
    ProjectAccess,
    require_project_access,
    require_project_owner,
)
from projecthub.modules.projects.schemas import (
    MessageResponse,
    ProjectCreate,
    ProjectListResponse,
    ProjectMessageResponse,
    ProjectResponse,
    ProjectUpdate,
    project_out,
)
from projecthub.modules.projects.service import ProjectService
from projecthub.modules.users.models import User
from projecthub.oauth2 import get_current_user

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=ProjectListResponse)
def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Projects the caller owns or collaborates on."""
    projects = ProjectService(db).list_for_user(current_user)
    return ProjectListResponse(projects=[project_out(p) for p in projects])


@router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=ProjectMessageResponse
)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    project = ProjectService(db).create_project(payload, current_user)
    return ProjectMessageResponse(
        message="Project created successfully", project=project_out(project)
    )


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(access: ProjectAccess = Depends(require_project_access)):
    return ProjectResponse(project=project_out(access.project))


@router.put("/{project_id}", response_model=ProjectMessageResponse)
def update_project(
    payload: ProjectUpdate,
    access: ProjectAccess = Depends(require_project_access),
    db: Session = Depends(get_db),
):
    project = ProjectService(db).update_project(access.project, payload)
    return ProjectMessageResponse(
        message="Project updated successfully", project=project_out(project)
    )


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    access: ProjectAccess = Depends(require_project_owner),
    db: Session = Depends(get_db),
):
    ProjectService(db).delete_project(access.project)
    return MessageResponse(message="Project deleted successfully")
