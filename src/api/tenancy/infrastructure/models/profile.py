"""SQLAlchemy ORM model for the profiles table."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class ProfileModel(Base, TimestampMixin):
    """ORM model for the profiles table.

    ``id`` is the identity issued by the authentication provider (one
    profile per identity). ``assigned_tenant_id`` is the garage the user
    currently works in.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    assigned_tenant_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="SET NULL"),
        nullable=True,
    )
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ProfileModel(id={self.id}, assigned_tenant_id={self.assigned_tenant_id})>"
