from sqlalchemy.orm import Session
from uuid import UUID
from typing import Iterable, List
from inkwell.models.post_categories import PostCategories

def create_post_categories(db: Session, post_id: UUID, category_ids: Iterable[UUID]) -> List[PostCategories]:
    """
    投稿にカテゴリを紐づける(重複したIDは1件にまとめる)
    """
    post_categories = []
    for category_id in dict.fromkeys(category_ids):
        db_post_category = PostCategories(post_id=post_id, category_id=category_id)
        db.add(db_post_category)
        post_categories.append(db_post_category)
    db.flush()
    return post_categories

def delete_post_categories_by_post_id(db: Session, post_id: UUID) -> bool:
    """
    投稿に紐づくカテゴリを投稿IDで削除
    """
    db.query(PostCategories).filter(PostCategories.post_id == post_id).delete(synchronize_session=False)
    db.flush()
    return True

def replace_post_categories(db: Session, post_id: UUID, category_ids: Iterable[UUID]) -> List[PostCategories]:
    """
    投稿に紐づくカテゴリをデリートインサートで置き換える

    コミットは呼び出し側で行う(投稿の更新と同じトランザクションにするため)
    """
    delete_post_categories_by_post_id(db, post_id)
    return create_post_categories(db, post_id, category_ids)

def get_post_ids_by_category_id(db: Session, category_id: UUID) -> List[UUID]:
    """
    カテゴリに紐づく投稿IDを取得
    """
    rows = db.query(PostCategories.post_id).filter(PostCategories.category_id == category_id).all()
    return [row.post_id for row in rows]
