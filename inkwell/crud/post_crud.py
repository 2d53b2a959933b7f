from sqlalchemy.orm import Session, selectinload
from sqlalchemy import and_, or_, func
from uuid import UUID
from datetime import datetime, timezone
from typing import List, Optional

from inkwell.models.posts import Posts
from inkwell.models.post_categories import PostCategories
from inkwell.crud.post_categories_crud import get_post_ids_by_category_id
from inkwell.schemas.post import PostListQuery

# ========== 条件 ==========
def _listable_post_cond():
    """
    一覧に表示できる投稿の条件(アーカイブ済みは常に除外)
    """
    return Posts.archived == False

def _search_cond(search: str):
    """
    タイトル・本文・抜粋の部分一致(大文字小文字を区別しない)
    """
    return or_(
        Posts.title.icontains(search, autoescape=True),
        Posts.content.icontains(search, autoescape=True),
        Posts.excerpt.icontains(search, autoescape=True),
    )

def _build_list_conditions(db: Session, query: PostListQuery) -> Optional[list]:
    """
    一覧・件数で共通の絞り込み条件を組み立てる

    Returns:
        list | None: カテゴリに投稿が1件もない場合はNone
    """
    conditions = [_listable_post_cond()]

    if query.published is not None:
        conditions.append(Posts.published == query.published)

    if query.author_id:
        conditions.append(Posts.author_id == query.author_id)

    if query.search:
        conditions.append(_search_cond(query.search))

    # カテゴリで絞り込む場合は先に投稿IDを集めてから絞り込む
    if query.category_id:
        post_ids = get_post_ids_by_category_id(db, query.category_id)
        if not post_ids:
            return None
        conditions.append(Posts.id.in_(post_ids))

    return conditions

def _with_categories(q):
    return q.options(selectinload(Posts.post_categories).joinedload(PostCategories.category))

# ========== 取得系 ==========
def get_post_by_id(db: Session, post_id: UUID) -> Optional[Posts]:
    """
    投稿をIDで取得
    """
    return db.query(Posts).filter(Posts.id == post_id).first()

def get_post_detail_by_id(db: Session, post_id: UUID) -> Optional[Posts]:
    """
    投稿をカテゴリ付きでIDで取得
    """
    return _with_categories(db.query(Posts)).filter(Posts.id == post_id).first()

def get_visible_post_by_slug(db: Session, slug: str, viewer_id: Optional[UUID] = None) -> Optional[Posts]:
    """
    スラッグで閲覧可能な投稿を取得

    未ログインは公開済みのみ、ログイン中は公開済みまたは自分の投稿
    (アーカイブ状態では絞り込まない)
    """
    if viewer_id is None:
        visible_cond = Posts.published == True
    else:
        visible_cond = or_(Posts.published == True, Posts.author_id == viewer_id)

    return (
        _with_categories(db.query(Posts))
        .filter(and_(Posts.slug == slug, visible_cond))
        .first()
    )

def exists_post_slug(db: Session, slug: str, exclude_post_id: Optional[UUID] = None) -> bool:
    """
    スラッグが他の投稿で使われているか
    """
    q = db.query(Posts.id).filter(Posts.slug == slug)
    if exclude_post_id is not None:
        q = q.filter(Posts.id != exclude_post_id)
    return db.query(q.exists()).scalar()

def get_posts(db: Session, query: PostListQuery) -> List[Posts]:
    """
    投稿一覧を取得(作成日時の降順、同時刻はIDの降順)
    """
    conditions = _build_list_conditions(db, query)
    if conditions is None:
        return []

    return (
        _with_categories(db.query(Posts))
        .filter(and_(*conditions))
        .order_by(Posts.created_at.desc(), Posts.id.desc())
        .limit(query.limit)
        .offset(query.offset)
        .all()
    )

def count_posts(db: Session, query: PostListQuery) -> int:
    """
    投稿一覧と同じ条件で件数を取得
    """
    conditions = _build_list_conditions(db, query)
    if conditions is None:
        return 0

    total = db.query(func.count(Posts.id)).filter(and_(*conditions)).scalar()
    return total or 0

def get_posts_by_author_id(db: Session, author_id: UUID) -> List[Posts]:
    """
    著者の全投稿を取得(下書き・アーカイブを含む、更新日時の降順)
    """
    return (
        _with_categories(db.query(Posts))
        .filter(Posts.author_id == author_id)
        .order_by(Posts.updated_at.desc(), Posts.id.desc())
        .all()
    )

# ========== 作成・更新・削除系 ==========
def create_post(db: Session, post_data: dict) -> Posts:
    """
    投稿を作成
    """
    now = datetime.now(timezone.utc)
    post = Posts(**post_data, created_at=now, updated_at=now)
    db.add(post)
    db.flush()
    return post

def update_post(db: Session, post: Posts, update_data: dict) -> Posts:
    """
    投稿を更新(updated_atは常に現在時刻にする)
    """
    for key, value in update_data.items():
        if hasattr(post, key):
            setattr(post, key, value)

    post.updated_at = datetime.now(timezone.utc)
    db.flush()
    return post

def delete_post_by_id(db: Session, post_id: UUID) -> bool:
    """
    投稿を削除(投稿カテゴリはON DELETE CASCADEで削除される)
    """
    db.query(Posts).filter(Posts.id == post_id).delete(synchronize_session=False)
    db.flush()
    return True
