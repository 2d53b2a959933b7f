from __future__ import annotations
from logging import Logger
from typing import List, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from inkwell.core.logger import Logger as CoreLogger
from inkwell.core.exceptions import Conflict, Forbidden, NotFound, Unauthorized, ValidationError
from inkwell.constants.messages import AuthMessage, CategoryMessage, PostMessage
from inkwell.constants.number import PostLength
from inkwell.crud import post_crud
from inkwell.crud.post_categories_crud import create_post_categories, replace_post_categories
from inkwell.db.errors import is_foreign_key_violation, is_unique_violation
from inkwell.models.posts import Posts
from inkwell.schemas.post import DeleteResponse, PostCreateRequest, PostListQuery, PostOut, PostUpdateRequest
from inkwell.schemas.principal import Principal
from inkwell.utils.slug import generate_slug

# 更新時にNoneを受け付けない項目(cover_image / excerpt はNoneでクリアできる)
NON_NULLABLE_FIELDS = ("title", "content", "slug", "published", "archived")


class PostDomain:
    """
    投稿の業務ルール(作成・更新・削除・閲覧権限・一覧)

    認証済みユーザー(Principal)は呼び出しごとに引数で受け取る
    """

    def __init__(self, db: Session):
        self.db: Session = db
        self.logger: Logger = CoreLogger.get_logger()

    # ========== 作成・更新・削除 ==========
    def create_post(self, payload: PostCreateRequest, user: Optional[Principal]) -> PostOut:
        user = self.__require_user(user)
        slug = self.__build_slug(payload.title)

        if post_crud.exists_post_slug(self.db, slug):
            raise Conflict(PostMessage.SLUG_CONFLICT_ON_CREATE)

        try:
            post = post_crud.create_post(self.db, {
                "title": payload.title,
                "content": payload.content,
                "slug": slug,
                "cover_image": payload.cover_image,
                "excerpt": payload.excerpt,
                "published": payload.published,
                "author_id": user.id,
                "author_name": user.author_name,
                "author_email": user.author_email,
            })
            if payload.category_ids:
                create_post_categories(self.db, post.id, payload.category_ids)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            self.logger.error(f"Error creating post: {e}")
            raise self.__translate_integrity_error(e, PostMessage.SLUG_CONFLICT_ON_CREATE)
        except Exception as e:
            self.db.rollback()
            self.logger.error(f"Error creating post: {e}")
            raise e

        self.logger.info(f"Post created: id={post.id} slug={slug}")
        return self.__to_out(post.id)

    def update_post(self, payload: PostUpdateRequest, user: Optional[Principal]) -> PostOut:
        user = self.__require_user(user)
        post = self.__get_owned_post(payload.id, user, PostMessage.FORBIDDEN_UPDATE)

        update_data = payload.model_dump(exclude_unset=True, exclude={"id", "category_ids"})
        for field in NON_NULLABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                del update_data[field]

        # スラッグ指定があれば正規化、タイトル変更時はタイトルから再生成する
        new_slug = None
        if "slug" in update_data:
            new_slug = self.__build_slug(update_data["slug"])
        if "title" in update_data and update_data["title"] != post.title:
            new_slug = self.__build_slug(update_data["title"])

        if new_slug is not None:
            if post_crud.exists_post_slug(self.db, new_slug, exclude_post_id=post.id):
                raise Conflict(PostMessage.SLUG_CONFLICT)
            update_data["slug"] = new_slug

        try:
            post_crud.update_post(self.db, post, update_data)
            # category_idsが送信された場合のみデリートインサート(空配列なら全解除)
            if payload.category_ids is not None:
                replace_post_categories(self.db, post.id, payload.category_ids)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            self.logger.error(f"Error updating post: {e}")
            raise self.__translate_integrity_error(e, PostMessage.SLUG_CONFLICT)
        except Exception as e:
            self.db.rollback()
            self.logger.error(f"Error updating post: {e}")
            raise e

        self.logger.info(f"Post updated: id={payload.id}")
        return self.__to_out(payload.id)

    def delete_post(self, post_id: UUID, user: Optional[Principal]) -> DeleteResponse:
        user = self.__require_user(user)
        self.__get_owned_post(post_id, user, PostMessage.FORBIDDEN_DELETE)

        try:
            post_crud.delete_post_by_id(self.db, post_id)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            self.logger.error(f"Error deleting post: {e}")
            raise e

        self.logger.info(f"Post deleted: id={post_id}")
        return DeleteResponse(success=True, message=PostMessage.DELETED)

    # ========== 取得系 ==========
    def get_post_by_slug(self, slug: str, user: Optional[Principal] = None) -> PostOut:
        viewer_id = user.id if user else None
        post = post_crud.get_visible_post_by_slug(self.db, slug, viewer_id)
        if not post:
            raise NotFound(PostMessage.NOT_FOUND)
        return PostOut.model_validate(post)

    def get_post_by_id(self, post_id: UUID, user: Optional[Principal]) -> PostOut:
        user = self.__require_user(user)
        self.__get_owned_post(post_id, user, PostMessage.FORBIDDEN_ACCESS)
        return self.__to_out(post_id)

    def list_posts(self, query: PostListQuery) -> List[PostOut]:
        posts = post_crud.get_posts(self.db, query)
        return [PostOut.model_validate(post) for post in posts]

    def count_posts(self, query: PostListQuery) -> int:
        return post_crud.count_posts(self.db, query)

    def get_user_posts(self, user: Optional[Principal]) -> List[PostOut]:
        user = self.__require_user(user)
        posts = post_crud.get_posts_by_author_id(self.db, user.id)
        return [PostOut.model_validate(post) for post in posts]

    # ========== 内部関数 ==========
    def __require_user(self, user: Optional[Principal]) -> Principal:
        if user is None:
            raise Unauthorized(AuthMessage.UNAUTHORIZED)
        return user

    def __get_owned_post(self, post_id: UUID, user: Principal, forbidden_message: str) -> Posts:
        """存在確認のあとに所有者を確認する"""
        post = post_crud.get_post_by_id(self.db, post_id)
        if not post:
            raise NotFound(PostMessage.NOT_FOUND)
        if post.author_id != user.id:
            raise Forbidden(forbidden_message)
        return post

    def __build_slug(self, text: str) -> str:
        slug = generate_slug(text, max_length=PostLength.SLUG_MAX)
        if not slug:
            raise ValidationError(PostMessage.EMPTY_SLUG)
        return slug

    def __translate_integrity_error(self, e: IntegrityError, conflict_message: str) -> Exception:
        """一意制約違反は重複エラー、外部キー違反(存在しないカテゴリID)は未検出エラー"""
        if is_unique_violation(e):
            return Conflict(conflict_message)
        if is_foreign_key_violation(e):
            return NotFound(CategoryMessage.NOT_FOUND)
        return e

    def __to_out(self, post_id: UUID) -> PostOut:
        post = post_crud.get_post_detail_by_id(self.db, post_id)
        if not post:
            raise NotFound(PostMessage.NOT_FOUND)
        return PostOut.model_validate(post)
