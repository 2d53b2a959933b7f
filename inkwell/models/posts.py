from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING
from uuid import UUID, uuid4
from datetime import datetime, timezone

from sqlalchemy import Boolean, String, Text, Uuid, Index, func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from inkwell.db.base import Base
from inkwell.constants.number import PostLength

if TYPE_CHECKING:
    from .post_categories import PostCategories


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Posts(Base):
    """投稿"""
    __tablename__ = "posts"
    __table_args__ = (
        Index("posts_author_idx", "author_id"),
        Index("posts_published_idx", "published"),
        Index("posts_created_at_idx", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(PostLength.TITLE_MAX), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(PostLength.SLUG_MAX), unique=True, nullable=False)
    cover_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    excerpt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # 作成後は変更しない
    author_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    # 作成時点の著者情報のスナップショット(更新時には変更しない)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_email: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, server_default=func.now())

    post_categories: Mapped[List["PostCategories"]] = relationship(
        "PostCategories",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def categories(self) -> list:
        return [pc.category for pc in self.post_categories]
