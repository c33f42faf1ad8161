from sqlalchemy import Boolean, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from quizzical.database.base import Base


# ------------------------------
# Category Model
# ------------------------------
class CategoryRecord(Base):
    """
    SQLAlchemy model representing a quiz category.

    The title (`name` column) is the business key. Questions refer to a
    category by this name rather than through a foreign key, so a category
    row can be created lazily the first time a question mentions it.
    Categories are never deleted, only deactivated.
    """
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        Text,
        primary_key=True,
    )

    # New categories are active unless told otherwise
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    def __repr__(self) -> str:
        return f"<CategoryRecord(name={self.name!r}, active={self.active!r})>"
