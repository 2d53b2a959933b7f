from fastapi import APIRouter, Depends, Query
from typing import List
from uuid import UUID
from inkwell.deps.auth import get_current_user
from inkwell.deps.initial_domain import initial_category_domain
from inkwell.domain.category.category_domain import CategoryDomain
from inkwell.schemas.categories import (
    CategoryCreateRequest,
    CategoryOut,
    CategoryUpdateRequest,
    CategoryWithCountOut,
)
from inkwell.schemas.post import DeleteResponse
from inkwell.schemas.principal import Principal

router = APIRouter()

@router.get("/list", response_model=List[CategoryWithCountOut])
def list_categories(category_domain: CategoryDomain = Depends(initial_category_domain)):
    return category_domain.list_categories()

@router.get("/by-slug", response_model=CategoryOut)
def get_category_by_slug(
    slug: str = Query(..., min_length=1, description="Category Slug"),
    category_domain: CategoryDomain = Depends(initial_category_domain),
):
    return category_domain.get_category_by_slug(slug)

@router.post("/create", response_model=CategoryOut)
def create_category(
    payload: CategoryCreateRequest,
    user: Principal = Depends(get_current_user),
    category_domain: CategoryDomain = Depends(initial_category_domain),
):
    return category_domain.create_category(payload, user)

@router.put("/update", response_model=CategoryOut)
def update_category(
    payload: CategoryUpdateRequest,
    user: Principal = Depends(get_current_user),
    category_domain: CategoryDomain = Depends(initial_category_domain),
):
    return category_domain.update_category(payload, user)

@router.delete("/delete", response_model=DeleteResponse)
def delete_category(
    category_id: UUID = Query(..., description="Category ID"),
    user: Principal = Depends(get_current_user),
    category_domain: CategoryDomain = Depends(initial_category_domain),
):
    return category_domain.delete_category(category_id, user)
