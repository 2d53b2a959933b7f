from inkwell.domain.post.post_domain import PostDomain
from inkwell.domain.category.category_domain import CategoryDomain
from inkwell.db.base import get_db
from sqlalchemy.orm import Session
from fastapi import Depends


def initial_post_domain(db: Session = Depends(get_db)) -> PostDomain:
    return PostDomain(db=db)


def initial_category_domain(db: Session = Depends(get_db)) -> CategoryDomain:
    return CategoryDomain(db=db)
