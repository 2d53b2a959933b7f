from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from uuid import UUID
from typing import List, Optional
from inkwell.models.categories import Categories
from inkwell.models.post_categories import PostCategories

def get_category_by_id(db: Session, category_id: UUID) -> Optional[Categories]:
    return db.query(Categories).filter(Categories.id == category_id).first()

def get_category_by_slug(db: Session, slug: str) -> Optional[Categories]:
    return db.query(Categories).filter(Categories.slug == slug).first()

def get_categories_with_post_count(db: Session) -> List[tuple]:
    """
    全カテゴリを投稿数付きで取得(名前順)
    """
    return (
        db.query(
            Categories,
            func.count(PostCategories.post_id).label("post_count"),
        )
        .outerjoin(PostCategories, Categories.id == PostCategories.category_id)
        .group_by(Categories.id)
        .order_by(Categories.name)
        .all()
    )

def exists_category(db: Session, name: str, slug: str, exclude_category_id: Optional[UUID] = None) -> bool:
    """
    同じ名前またはスラッグのカテゴリが存在するか
    """
    q = db.query(Categories.id).filter(or_(Categories.name == name, Categories.slug == slug))
    if exclude_category_id is not None:
        q = q.filter(Categories.id != exclude_category_id)
    return db.query(q.exists()).scalar()

def create_category(db: Session, category_data: dict) -> Categories:
    """
    カテゴリを作成
    """
    category = Categories(**category_data)
    db.add(category)
    db.flush()
    return category

def update_category(db: Session, category: Categories, update_data: dict) -> Categories:
    """
    カテゴリを更新
    """
    for key, value in update_data.items():
        if hasattr(category, key):
            setattr(category, key, value)
    db.flush()
    return category

def delete_category_by_id(db: Session, category_id: UUID) -> bool:
    """
    カテゴリを削除(投稿カテゴリはON DELETE CASCADEで削除される)
    """
    db.query(Categories).filter(Categories.id == category_id).delete(synchronize_session=False)
    db.flush()
    return True
