"""Application services for project versions and the current-version pointer."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from projecthub.core.config import settings
from projecthub.core.db_defaults import utcnow
from projecthub.core.exceptions import ResourceNotFoundException
from projecthub.modules.projects.models import Project
from projecthub.modules.users.models import User

from .models import Version
from .schemas import VersionCreate

logger = logging.getLogger(__name__)


class VersionService:
    """Versions are append-only: this service creates and reads them, never edits them."""

    def __init__(self, db: Session):
        self.db = db

    def list_versions(self, project: Project) -> List[Version]:
        return (
            self.db.query(Version)
            .filter(Version.project_id == project.id)
            .order_by(Version.created_at.desc(), Version.id.desc())
            .all()
        )

    def create_version(
        self, project: Project, payload: VersionCreate, author: User
    ) -> Version:
        """Record a version, copying the shared code file if one was ever saved.

        The project's current version pointer is left untouched.
        """
        version = Version(
            project_id=project.id,
            version_number=payload.version_number,
            description=payload.description or "",
            created_by_id=author.id,
        )
        if project.has_saved_code_file:
            version.snapshot_filename = project.code_filename
            version.snapshot_content = project.code_content or ""

        self.db.add(version)
        self.db.commit()
        self.db.refresh(version)
        logger.info(
            f"Version {version.id} created", extra={"project_id": project.id}
        )
        return version

    def get_project_version(self, project: Project, version_id: int) -> Version:
        version = (
            self.db.query(Version)
            .filter(Version.id == version_id, Version.project_id == project.id)
            .first()
        )
        if version is None:
            raise ResourceNotFoundException("Version", version_id)
        return version

    def set_current_version(self, project: Project, version_id: int) -> Version:
        """Point the project at a version and restore its snapshot when it has one."""
        version = self.get_project_version(project, version_id)

        project.current_version_id = version.id
        if version.has_snapshot:
            project.code_filename = (
                version.snapshot_filename
                or project.code_filename
                or settings.default_code_filename
            )
            project.code_content = version.snapshot_content or ""
            project.code_updated_at = utcnow()

        self.db.commit()
        self.db.refresh(project)
        logger.info(
            f"Current version set to {version.id}",
            extra={"project_id": project.id},
        )
        return version
