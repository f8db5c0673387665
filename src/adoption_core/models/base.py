"""
Base model classes for all SQLAlchemy models in the adoption-core package.

Every entity uses a store-assigned integer identity, exposed under an
entity-specific column name (``pet_id``, ``log_id`` and so on), plus
creation/modification timestamps managed by the database.

Example:
    >>> from adoption_core.models.base import BaseModel
    >>> from sqlalchemy.orm import Mapped, mapped_column
    >>> from sqlalchemy import Integer, String

    >>> class Shelter(BaseModel):
    ...     __tablename__ = "shelters"
    ...     shelter_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    ...     name: Mapped[str] = mapped_column(String(100))

    >>> Shelter.get_primary_key_column()
    'shelter_id'
"""

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base declarative class for all SQLAlchemy models."""


class BaseModel(Base):
    """
    Abstract base model class providing common functionality for all entities.

    Attributes:
        created_at (datetime): Timestamp when the record was created
        updated_at (datetime): Timestamp when the record was last updated

    Note:
        This is an abstract base class. Concrete models must define a
        ``__tablename__`` and exactly one integer primary key column.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        """Return string representation, e.g. ``<Pet(pet_id=3)>``."""
        pk = self.get_primary_key_column()
        return f"<{self.__class__.__name__}({pk}={getattr(self, pk, None)})>"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model instance to dictionary representation.

        Datetime values are rendered as ISO format strings.
        """
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                result[column.name] = value.isoformat()
            else:
                result[column.name] = value
        return result

    @classmethod
    def get_table_name(cls) -> str:
        """Get the database table name for this model."""
        return cls.__tablename__

    @classmethod
    def get_primary_key_column(cls) -> str:
        """Get the name of the primary key column for this model."""
        return cls.__table__.primary_key.columns.values()[0].name

    @classmethod
    def get_column_names(cls) -> List[str]:
        """Get all column names defined on the model's table."""
        return [column.name for column in cls.__table__.columns]

    @classmethod
    def get_writable_columns(cls) -> List[str]:
        """Get the columns a client may write (identity and audit columns excluded)."""
        excluded = {cls.get_primary_key_column(), "created_at", "updated_at"}
        return [name for name in cls.get_column_names() if name not in excluded]
