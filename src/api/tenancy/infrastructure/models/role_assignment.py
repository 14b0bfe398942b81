"""SQLAlchemy ORM model for the role_assignments table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class RoleAssignmentModel(Base, TimestampMixin):
    """ORM model for the role_assignments table (one role per user)."""

    __tablename__ = "role_assignments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RoleAssignmentModel(user_id={self.user_id}, role={self.role})>"
