"""Project domain models."""

import enum

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from projecthub.core.database import Base
from projecthub.core.db_defaults import timestamp_default, utcnow

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
DOCUMENTATION_MAX_LENGTH = 10_000
CODE_FILENAME_MAX_LENGTH = 100
CODE_CONTENT_MAX_LENGTH = 20_000


class CollaboratorRole(str, enum.Enum):
    OWNER = "Owner"
    COLLABORATOR = "Collaborator"


class Project(Base):
    """A tracked project with its documentation blob and one shared code file.

    The owner is referenced by ``owner_id`` only; ``members`` holds everyone else.
    """

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=False, default="")
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    documentation = Column(Text, nullable=False, default="")

    code_filename = Column(String(CODE_FILENAME_MAX_LENGTH), nullable=True)
    code_content = Column(Text, nullable=True)
    code_updated_at = Column(DateTime(timezone=True), nullable=True)

    current_version_id = Column(
        Integer,
        ForeignKey(
            "versions.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_projects_current_version_id",
        ),
        nullable=True,
    )

    created_at = Column(DateTime(timezone=True), server_default=timestamp_default())
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=timestamp_default(),
        onupdate=utcnow,
    )

    owner = relationship("User", lazy="selectin")
    members = relationship(
        "ProjectCollaborator",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectCollaborator.id",
        lazy="selectin",
    )

    @property
    def member_ids(self) -> set:
        return {member.user_id for member in self.members}

    @property
    def has_saved_code_file(self) -> bool:
        return self.code_updated_at is not None


class ProjectCollaborator(Base):
    """Membership row for a non-owner user invited to a project."""

    __tablename__ = "project_collaborators"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_collaborator"),
    )

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role = Column(
        Enum(CollaboratorRole, name="collaborator_role"),
        nullable=False,
        default=CollaboratorRole.COLLABORATOR,
    )
    added_at = Column(DateTime(timezone=True), server_default=timestamp_default())

    project = relationship("Project", back_populates="members")
    user = relationship("User", lazy="selectin")


__all__ = [
    "CollaboratorRole",
    "Project",
    "ProjectCollaborator",
    "NAME_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "DOCUMENTATION_MAX_LENGTH",
    "CODE_FILENAME_MAX_LENGTH",
    "CODE_CONTENT_MAX_LENGTH",
]
