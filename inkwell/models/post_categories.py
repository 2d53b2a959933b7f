from __future__ import annotations
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, Uuid
from sqlalchemy.orm import relationship, Mapped, mapped_column

from inkwell.db.base import Base

if TYPE_CHECKING:
    from .posts import Posts
    from .categories import Categories

class PostCategories(Base):
    """投稿カテゴリ(中間テーブル)"""
    __tablename__ = "post_categories"

    post_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    category_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    post: Mapped["Posts"] = relationship("Posts", back_populates="post_categories")
    category: Mapped["Categories"] = relationship("Categories", back_populates="post_categories", lazy="joined")
