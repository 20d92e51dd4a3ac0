"""Version domain models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from projecthub.core.database import Base
from projecthub.core.db_defaults import timestamp_default, utcnow
from projecthub.modules.projects.models import CODE_FILENAME_MAX_LENGTH

VERSION_NUMBER_MAX_LENGTH = 50
VERSION_DESCRIPTION_MAX_LENGTH = 500


class Version(Base):
    """An append-only label on a project, optionally carrying a code file snapshot.

    ``version_number`` is a free-text label; it is neither unique nor ordered.
    """

    __tablename__ = "versions"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    version_number = Column(String(VERSION_NUMBER_MAX_LENGTH), nullable=False)
    description = Column(String(VERSION_DESCRIPTION_MAX_LENGTH), nullable=False, default="")
    created_by_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    snapshot_filename = Column(String(CODE_FILENAME_MAX_LENGTH), nullable=True)
    snapshot_content = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=timestamp_default()
    )

    created_by = relationship("User", lazy="selectin")

    @property
    def has_snapshot(self) -> bool:
        """True when the snapshot carries a filename or some content worth restoring."""
        return bool(self.snapshot_filename) or bool(self.snapshot_content)


__all__ = ["Version", "VERSION_NUMBER_MAX_LENGTH", "VERSION_DESCRIPTION_MAX_LENGTH"]
