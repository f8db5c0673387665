"""Category model. Pets refer to categories by name, not by identity."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Category(BaseModel):
    """Pet category such as Dogs or Cats."""

    __tablename__ = "categories"

    category_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    category_name: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True, comment="Unique category name"
    )
