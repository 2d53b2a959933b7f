from __future__ import annotations
from logging import Logger
from typing import List, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from inkwell.core.logger import Logger as CoreLogger
from inkwell.core.exceptions import Conflict, NotFound, Unauthorized, ValidationError
from inkwell.constants.messages import AuthMessage, CategoryMessage
from inkwell.constants.number import CategoryLength
from inkwell.crud import categories_crud
from inkwell.models.categories import Categories
from inkwell.schemas.categories import (
    CategoryCreateRequest,
    CategoryOut,
    CategoryUpdateRequest,
    CategoryWithCountOut,
)
from inkwell.schemas.post import DeleteResponse
from inkwell.schemas.principal import Principal
from inkwell.utils.slug import generate_slug


class CategoryDomain:
    """
    カテゴリ(共有の分類)の業務ルール

    所有者の概念はなく、ログイン済みであれば誰でも作成・更新・削除できる
    """

    def __init__(self, db: Session):
        self.db: Session = db
        self.logger: Logger = CoreLogger.get_logger()

    def list_categories(self) -> List[CategoryWithCountOut]:
        rows = categories_crud.get_categories_with_post_count(self.db)
        return [
            CategoryWithCountOut(
                **CategoryOut.model_validate(category).model_dump(),
                post_count=post_count or 0,
            )
            for category, post_count in rows
        ]

    def get_category_by_slug(self, slug: str) -> CategoryOut:
        category = categories_crud.get_category_by_slug(self.db, slug)
        if not category:
            raise NotFound(CategoryMessage.NOT_FOUND)
        return CategoryOut.model_validate(category)

    def create_category(self, payload: CategoryCreateRequest, user: Optional[Principal]) -> CategoryOut:
        self.__require_user(user)
        slug = self.__build_slug(payload.name)

        if categories_crud.exists_category(self.db, payload.name, slug):
            raise Conflict(CategoryMessage.CONFLICT)

        try:
            category = categories_crud.create_category(self.db, {
                "name": payload.name,
                "slug": slug,
                "description": payload.description or None,
            })
            self.db.commit()
            self.db.refresh(category)
        except IntegrityError as e:
            self.db.rollback()
            self.logger.error(f"Error creating category: {e}")
            raise Conflict(CategoryMessage.CONFLICT)
        except Exception as e:
            self.db.rollback()
            self.logger.error(f"Error creating category: {e}")
            raise e

        self.logger.info(f"Category created: id={category.id} slug={slug}")
        return CategoryOut.model_validate(category)

    def update_category(self, payload: CategoryUpdateRequest, user: Optional[Principal]) -> CategoryOut:
        self.__require_user(user)
        category = self.__get_category(payload.id)

        update_data = {}
        # 名前が変わる場合はスラッグを再生成
        if payload.name and payload.name != category.name:
            slug = self.__build_slug(payload.name)
            if categories_crud.exists_category(self.db, payload.name, slug, exclude_category_id=category.id):
                raise Conflict(CategoryMessage.CONFLICT)
            update_data["name"] = payload.name
            update_data["slug"] = slug

        # descriptionは送信された場合のみ更新(nullでクリア)
        if "description" in payload.model_fields_set:
            update_data["description"] = payload.description

        try:
            categories_crud.update_category(self.db, category, update_data)
            self.db.commit()
            self.db.refresh(category)
        except IntegrityError as e:
            self.db.rollback()
            self.logger.error(f"Error updating category: {e}")
            raise Conflict(CategoryMessage.CONFLICT)
        except Exception as e:
            self.db.rollback()
            self.logger.error(f"Error updating category: {e}")
            raise e

        self.logger.info(f"Category updated: id={category.id}")
        return CategoryOut.model_validate(category)

    def delete_category(self, category_id: UUID, user: Optional[Principal]) -> DeleteResponse:
        self.__require_user(user)
        self.__get_category(category_id)

        try:
            categories_crud.delete_category_by_id(self.db, category_id)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            self.logger.error(f"Error deleting category: {e}")
            raise e

        self.logger.info(f"Category deleted: id={category_id}")
        return DeleteResponse(success=True, message=CategoryMessage.DELETED)

    # ========== 内部関数 ==========
    def __require_user(self, user: Optional[Principal]) -> Principal:
        if user is None:
            raise Unauthorized(AuthMessage.UNAUTHORIZED)
        return user

    def __get_category(self, category_id: UUID) -> Categories:
        category = categories_crud.get_category_by_id(self.db, category_id)
        if not category:
            raise NotFound(CategoryMessage.NOT_FOUND)
        return category

    def __build_slug(self, name: str) -> str:
        slug = generate_slug(name, max_length=CategoryLength.SLUG_MAX)
        if not slug:
            raise ValidationError(CategoryMessage.EMPTY_SLUG)
        return slug
