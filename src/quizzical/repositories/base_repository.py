"""
Base repository class shared by the category and question repositories.

It holds the model class and the caller-owned session, and knows how to pick
the dialect-specific INSERT construct needed for ON CONFLICT clauses.
A repository never opens or closes sessions: the caller owns the session for
one logical operation and a repository instance lives no longer than that.
"""

import logging
from typing import Generic, Type, TypeVar

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from quizzical.database.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

# Dialects whose INSERT supports ON CONFLICT DO NOTHING / DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (the class itself, not an instance)
            db: The async database session, injected by the caller
        """
        self.model = model
        self.db = db

    @property
    def dialect_name(self) -> str:
        return self.db.get_bind().dialect.name

    def upsert_insert(self):
        """
        Return a dialect-specific INSERT for `self.model` that supports ON CONFLICT.

        Raises:
            NotImplementedError: for dialects without ON CONFLICT support.
        """
        factory = _UPSERT_INSERTS.get(self.dialect_name)
        if factory is None:
            raise NotImplementedError(f"Upsert is not supported on dialect '{self.dialect_name}'")
        return factory(self.model)
