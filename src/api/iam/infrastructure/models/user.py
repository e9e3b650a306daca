"""SQLAlchemy ORM model for the users table.

Stores registered users with their site-wide role and activation flag.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin
from shared_kernel.authorization.types import UserRole


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    ``role`` and ``active`` are only changed by a site admin. Authentication
    reloads both on every request so a demotion or deactivation takes effect
    without waiting for a token to expire.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=UserRole.USER.value
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, email={self.email}, role={self.role})>"
