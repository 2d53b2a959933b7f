from fastapi import APIRouter

from inkwell.api.endpoints import (
    post,
    category,
    health,
)

api_router = APIRouter()

# 公開・要認証の区別は各エンドポイントの依存関係(get_current_user)で行う
api_router.include_router(post.router, prefix="/post", tags=["Post"])
api_router.include_router(category.router, prefix="/category", tags=["Category"])
api_router.include_router(health.router, tags=["Health"])
