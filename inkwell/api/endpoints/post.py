from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from uuid import UUID
from inkwell.deps.auth import get_current_user, get_current_user_optional
from inkwell.deps.initial_domain import initial_post_domain
from inkwell.domain.post.post_domain import PostDomain
from inkwell.schemas.post import DeleteResponse, PostCreateRequest, PostListQuery, PostOut, PostUpdateRequest
from inkwell.schemas.principal import Principal
from inkwell.constants.number import PostListLimit

router = APIRouter()


def _list_query(
    published: Optional[bool] = Query(None, description="公開状態"),
    category_id: Optional[UUID] = Query(None, description="カテゴリID"),
    author_id: Optional[UUID] = Query(None, description="著者ID"),
    search: Optional[str] = Query(None, description="検索文字列(タイトル・本文・抜粋)"),
    limit: int = Query(PostListLimit.DEFAULT, ge=1, le=PostListLimit.MAX),
    offset: int = Query(0, ge=0),
) -> PostListQuery:
    return PostListQuery(
        published=published,
        category_id=category_id,
        author_id=author_id,
        search=search,
        limit=limit,
        offset=offset,
    )


# ========== 公開 ==========
@router.get("/list", response_model=List[PostOut])
def list_posts(
    query: PostListQuery = Depends(_list_query),
    post_domain: PostDomain = Depends(initial_post_domain),
):
    """
    投稿一覧(アーカイブ済みは除外)

    次ページの有無は limit+1 件を取得して呼び出し側で判定する
    """
    return post_domain.list_posts(query)


@router.get("/count", response_model=int)
def count_posts(
    query: PostListQuery = Depends(_list_query),
    post_domain: PostDomain = Depends(initial_post_domain),
):
    """投稿一覧と同じ条件の件数"""
    return post_domain.count_posts(query)


@router.get("/by-slug", response_model=PostOut)
def get_post_by_slug(
    slug: str = Query(..., min_length=1, description="スラッグ"),
    user: Optional[Principal] = Depends(get_current_user_optional),
    post_domain: PostDomain = Depends(initial_post_domain),
):
    """スラッグで投稿を取得(下書きは著者本人のみ)"""
    return post_domain.get_post_by_slug(slug, user)


# ========== 要認証 ==========
@router.post("/create", response_model=PostOut)
def create_post(
    post_create: PostCreateRequest,
    user: Principal = Depends(get_current_user),
    post_domain: PostDomain = Depends(initial_post_domain),
):
    """投稿を作成する"""
    return post_domain.create_post(post_create, user)


@router.put("/update", response_model=PostOut)
def update_post(
    request_data: PostUpdateRequest,
    user: Principal = Depends(get_current_user),
    post_domain: PostDomain = Depends(initial_post_domain),
):
    """投稿を更新する"""
    return post_domain.update_post(request_data, user)


@router.delete("/delete", response_model=DeleteResponse)
def delete_post(
    post_id: UUID = Query(..., description="投稿ID"),
    user: Principal = Depends(get_current_user),
    post_domain: PostDomain = Depends(initial_post_domain),
):
    """投稿を削除する"""
    return post_domain.delete_post(post_id, user)


@router.get("/mine", response_model=List[PostOut])
def get_user_posts(
    user: Principal = Depends(get_current_user),
    post_domain: PostDomain = Depends(initial_post_domain),
):
    """自分の投稿一覧(下書き・アーカイブを含む)"""
    return post_domain.get_user_posts(user)


@router.get("/detail", response_model=PostOut)
def get_post_detail(
    post_id: UUID = Query(..., description="投稿ID"),
    user: Principal = Depends(get_current_user),
    post_domain: PostDomain = Depends(initial_post_domain),
):
    """編集画面用に自分の投稿を取得する"""
    return post_domain.get_post_by_id(post_id, user)
