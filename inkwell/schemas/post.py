from pydantic import BaseModel, ConfigDict, Field, computed_field
from uuid import UUID
from typing import Optional, List
from datetime import datetime

from inkwell.api.commons.utils import calculate_reading_time, truncate_text
from inkwell.constants.number import PostLength, PostListLimit
from inkwell.schemas.categories import CategoryOut


class PostCreateRequest(BaseModel):
	title: str = Field(..., min_length=1, max_length=PostLength.TITLE_MAX)
	content: str = Field(..., min_length=1)
	cover_image: Optional[str] = None
	excerpt: Optional[str] = Field(default=None, max_length=PostLength.EXCERPT_MAX)
	published: bool = False
	category_ids: List[UUID] = []


class PostUpdateRequest(BaseModel):
	"""
	投稿更新リクエスト

	未指定(送信されていない)項目は更新しない。
	category_ids は送信された場合のみ紐づけを置き換える(空配列なら全解除)。
	"""
	id: UUID
	title: Optional[str] = Field(default=None, min_length=1, max_length=PostLength.TITLE_MAX)
	content: Optional[str] = Field(default=None, min_length=1)
	slug: Optional[str] = Field(default=None, min_length=1, max_length=PostLength.SLUG_MAX)
	cover_image: Optional[str] = None
	excerpt: Optional[str] = Field(default=None, max_length=PostLength.EXCERPT_MAX)
	published: Optional[bool] = None
	archived: Optional[bool] = None
	category_ids: Optional[List[UUID]] = None


class PostListQuery(BaseModel):
	"""投稿一覧・件数の絞り込み条件"""
	published: Optional[bool] = None
	category_id: Optional[UUID] = None
	author_id: Optional[UUID] = None
	search: Optional[str] = None
	limit: int = Field(default=PostListLimit.DEFAULT, ge=1, le=PostListLimit.MAX)
	offset: int = Field(default=0, ge=0)


class PostOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: UUID
	title: str
	content: str
	slug: str
	cover_image: Optional[str] = None
	excerpt: Optional[str] = None
	published: bool
	archived: bool
	author_id: UUID
	author_name: str
	author_email: str
	created_at: datetime
	updated_at: datetime
	categories: List[CategoryOut] = []

	@computed_field
	@property
	def reading_time(self) -> int:
		return calculate_reading_time(self.content)

	@computed_field
	@property
	def preview(self) -> str:
		if self.excerpt:
			return self.excerpt
		return truncate_text(self.content, PostLength.PREVIEW_MAX)


class DeleteResponse(BaseModel):
	success: bool
	message: str
