from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING
from uuid import UUID, uuid4
from datetime import datetime, timezone

from sqlalchemy import String, Text, Uuid, func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from inkwell.db.base import Base
from inkwell.constants.number import CategoryLength

if TYPE_CHECKING:
    from .post_categories import PostCategories

class Categories(Base):
    """カテゴリ(全ユーザー共有)"""
    __tablename__ = "categories"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(CategoryLength.NAME_MAX), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(CategoryLength.SLUG_MAX), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, default=lambda: datetime.now(timezone.utc), server_default=func.now()
    )

    post_categories: Mapped[List["PostCategories"]] = relationship(
        "PostCategories",
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
