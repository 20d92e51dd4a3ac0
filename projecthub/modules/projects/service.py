"""Application services for the projects domain."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from projecthub.core.config import settings
from projecthub.core.db_defaults import utcnow
from projecthub.core.exceptions import BadRequestException, ResourceConflictException
from projecthub.modules.users.models import User
from projecthub.modules.users.service import UserService
from projecthub.modules.versions.models import Version

from .access import is_project_member
from .models import CollaboratorRole, Project, ProjectCollaborator
from .schemas import CodeFileUpdate, ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


class ProjectService:
    """Project metadata, membership, documentation and shared code file operations.

    Callers pass projects already resolved by the access gate.
    """

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, project: Project) -> Project:
        self.db.commit()
        self.db.refresh(project)
        return project

    def list_for_user(self, user: User) -> List[Project]:
        """Projects the user owns or collaborates on, most recently updated first."""
        return (
            self.db.query(Project)
            .filter(
                or_(
                    Project.owner_id == user.id,
                    Project.members.any(ProjectCollaborator.user_id == user.id),
                )
            )
            .order_by(Project.updated_at.desc(), Project.id.desc())
            .all()
        )

    def create_project(self, payload: ProjectCreate, owner: User) -> Project:
        project = Project(
            name=payload.name,
            description=payload.description or "",
            owner_id=owner.id,
            documentation="",
        )
        self.db.add(project)
        self._commit(project)
        logger.info("Project created", extra={"project_id": project.id})
        return project

    def update_project(self, project: Project, payload: ProjectUpdate) -> Project:
        if payload.name:
            project.name = payload.name
        if payload.description is not None:
            project.description = payload.description
        return self._commit(project)

    def delete_project(self, project: Project) -> None:
        """Delete the project together with its versions and memberships."""
        project_id = project.id
        project.current_version_id = None
        self.db.flush()
        deleted_versions = (
            self.db.query(Version)
            .filter(Version.project_id == project_id)
            .delete(synchronize_session=False)
        )
        self.db.delete(project)
        self.db.commit()
        logger.info(
            f"Project deleted with {deleted_versions} version(s)",
            extra={"project_id": project_id},
        )

    # ------------------------------------------------------------------ members

    def add_collaborator(self, project: Project, email: str) -> Project:
        user = UserService(self.db).get_by_email_or_404(email)
        if is_project_member(project, user.id):
            raise ResourceConflictException(
                "User is already a collaborator or owner of this project"
            )

        project.members.append(
            ProjectCollaborator(user_id=user.id, role=CollaboratorRole.COLLABORATOR)
        )
        project.updated_at = utcnow()
        try:
            self._commit(project)
        except IntegrityError:
            self.db.rollback()
            raise ResourceConflictException(
                "User is already a collaborator or owner of this project"
            )
        logger.info(
            f"Collaborator {user.id} added", extra={"project_id": project.id}
        )
        return project

    def remove_collaborator(self, project: Project, user_id: int) -> Project:
        """Drop a member; unknown ids are a silent no-op, the owner is refused."""
        if project.owner_id == user_id:
            raise BadRequestException("Cannot remove project owner")

        member = next((m for m in project.members if m.user_id == user_id), None)
        if member is None:
            return project

        project.members.remove(member)
        project.updated_at = utcnow()
        self._commit(project)
        logger.info(
            f"Collaborator {user_id} removed", extra={"project_id": project.id}
        )
        return project

    # ------------------------------------------------------- documentation/code

    def update_documentation(self, project: Project, documentation: str | None) -> Project:
        project.documentation = documentation or ""
        return self._commit(project)

    def update_code_file(self, project: Project, payload: CodeFileUpdate) -> Project:
        """Overwrite the shared code file wholesale; the last write wins."""
        project.code_filename = (
            payload.filename or project.code_filename or settings.default_code_filename
        )
        project.code_content = payload.content or ""
        project.code_updated_at = utcnow()
        return self._commit(project)
