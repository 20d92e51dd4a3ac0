"""Project access-control gate.

Two FastAPI dependencies guard every ``/projects/{project_id}`` route:

- ``require_project_access``: the owner or any collaborator may proceed.
- ``require_project_owner``: only the owner may proceed.

Both load the project once and hand it to the route as a ``ProjectAccess`` so
handlers never fetch it again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from projecthub.core.database import get_db
from projecthub.core.exceptions import (
    DatabaseException,
    OwnershipRequiredException,
    PermissionDeniedException,
    ResourceNotFoundException,
)
from projecthub.modules.users.models import User
from projecthub.oauth2 import get_current_user

from .models import Project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectAccess:
    project: Project
    user: User
    is_owner: bool


def is_project_owner(project: Project, user_id: int) -> bool:
    return project.owner_id == user_id


def is_project_member(project: Project, user_id: int) -> bool:
    """Owner or collaborator; the member role is irrelevant."""
    return is_project_owner(project, user_id) or user_id in project.member_ids


def load_project(db: Session, project_id: int) -> Project:
    try:
        project = db.get(Project, project_id)
    except SQLAlchemyError:
        logger.exception("Error checking project access", extra={"project_id": project_id})
        raise DatabaseException("Error checking project access")
    if project is None:
        raise ResourceNotFoundException("Project", project_id)
    return project


def check_project_access(db: Session, project_id: int, user: User) -> ProjectAccess:
    project = load_project(db, project_id)
    if not is_project_member(project, user.id):
        raise PermissionDeniedException("Access denied to this project")
    return ProjectAccess(project=project, user=user, is_owner=is_project_owner(project, user.id))


def check_project_owner(db: Session, project_id: int, user: User) -> ProjectAccess:
    project = load_project(db, project_id)
    if not is_project_owner(project, user.id):
        raise OwnershipRequiredException("project")
    return ProjectAccess(project=project, user=user, is_owner=True)


def require_project_access(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectAccess:
    return check_project_access(db, project_id, current_user)


def require_project_owner(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectAccess:
    return check_project_owner(db, project_id, current_user)
