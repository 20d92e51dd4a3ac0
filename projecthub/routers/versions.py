from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from projecthub.core.database import get_db
from projecthub.modules.projects.access import ProjectAccess, require_project_access
from projecthub.modules.projects.schemas import code_file_out
from projecthub.modules.versions.schemas import (
    CurrentVersionResponse,
    VersionCreate,
    VersionListResponse,
    VersionMessageResponse,
    version_out,
)
from projecthub.modules.versions.service import VersionService

router = APIRouter(prefix="/projects", tags=["Versions"])


@router.get("/{project_id}/versions", response_model=VersionListResponse)
def list_versions(
    access: ProjectAccess = Depends(require_project_access),
    db: Session = Depends(get_db),
):
    """Versions newest first, plus the project's current version id."""
    versions = VersionService(db).list_versions(access.project)
    return VersionListResponse(
        versions=[version_out(v) for v in versions],
        current_version=access.project.current_version_id,
    )


@router.post(
    "/{project_id}/versions",
    status_code=status.HTTP_201_CREATED,
    response_model=VersionMessageResponse,
)
def create_version(
    payload: VersionCreate,
    access: ProjectAccess = Depends(require_project_access),
    db: Session = Depends(get_db),
):
    version = VersionService(db).create_version(access.project, payload, access.user)
    return VersionMessageResponse(
        message="Version created successfully", version=version_out(version)
    )


@router.put(
    "/{project_id}/versions/{version_id}/current",
    response_model=CurrentVersionResponse,
)
def set_current_version(
    version_id: int,
    access: ProjectAccess = Depends(require_project_access),
    db: Session = Depends(get_db),
):
    project = access.project
    version = VersionService(db).set_current_version(project, version_id)
    return CurrentVersionResponse(
        message="Current version updated successfully",
        current_version=version.id,
        version=version_out(version),
        code_file=code_file_out(project),
    )
