"""SQLAlchemy ORM model for the profiles table.

Rows are written by the registration flow. Most columns are nullable
because older sign-up paths stored only part of the profile.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class MemberProfileModel(Base, TimestampMixin):
    """ORM model for profiles table.

    Note: id is VARCHAR(255) to hold the auth provider's subject id.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    favorite_sport: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    is_premium: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<MemberProfileModel(id={self.id}, name={self.name})>"
