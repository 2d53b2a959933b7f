import pytest
from datetime import datetime, timedelta
from uuid import uuid4
from inkwell.core.exceptions import Conflict, Forbidden, NotFound, Unauthorized, ValidationError
from inkwell.domain.post.post_domain import PostDomain
from inkwell.domain.category.category_domain import CategoryDomain
from inkwell.models.post_categories import PostCategories
from inkwell.models.posts import Posts
from inkwell.schemas.categories import CategoryCreateRequest
from inkwell.schemas.post import PostCreateRequest, PostListQuery, PostUpdateRequest


@pytest.fixture
def post_domain(db):
    return PostDomain(db=db)


@pytest.fixture
def category_domain(db):
    return CategoryDomain(db=db)


def _create(post_domain, user, title="Hello World", **kwargs):
    payload = PostCreateRequest(title=title, content=kwargs.pop("content", "body text"), **kwargs)
    return post_domain.create_post(payload, user)


# ========== 作成 ==========
def test_create_post_generates_slug_and_author_snapshot(post_domain, author):
    post = _create(post_domain, author, title="Héllo,  World!")
    assert post.slug == "hello-world"
    assert post.author_id == author.id
    assert post.author_name == "Alice"
    assert post.author_email == "alice@example.com"
    assert post.published is False
    assert post.archived is False
    assert post.categories == []


def test_create_post_author_name_falls_back_to_email(post_domain, author):
    author.display_name = None
    post = _create(post_domain, author)
    assert post.author_name == "alice"


def test_create_post_requires_user(post_domain):
    with pytest.raises(Unauthorized):
        _create(post_domain, None)


def test_create_post_with_duplicate_slug_conflicts(post_domain, author, other_user):
    _create(post_domain, author, title="Hello World")
    with pytest.raises(Conflict):
        _create(post_domain, other_user, title="hello   world!!")


def test_create_post_with_title_without_alphanumerics_is_rejected(post_domain, author):
    with pytest.raises(ValidationError):
        _create(post_domain, author, title="!!!")


def test_create_post_with_categories(post_domain, category_domain, author):
    tech = category_domain.create_category(CategoryCreateRequest(name="Tech"), author)
    life = category_domain.create_category(CategoryCreateRequest(name="Life"), author)
    post = _create(post_domain, author, category_ids=[tech.id, life.id, tech.id])
    assert sorted(c.name for c in post.categories) == ["Life", "Tech"]


def test_create_post_with_unknown_category_rolls_back(post_domain, db, author):
    with pytest.raises(NotFound):
        _create(post_domain, author, category_ids=[uuid4()])
    assert db.query(Posts).count() == 0


def test_unique_violation_from_store_surfaces_as_conflict(post_domain, db, author, monkeypatch):
    _create(post_domain, author, title="Hello World")
    # 事前チェックをすり抜けた同時書き込みを再現する
    monkeypatch.setattr("inkwell.crud.post_crud.exists_post_slug", lambda *args, **kwargs: False)
    with pytest.raises(Conflict):
        _create(post_domain, author, title="Hello World")
    assert db.query(Posts).count() == 1


def test_unique_violation_on_rename_surfaces_as_conflict(post_domain, author, monkeypatch):
    _create(post_domain, author, title="Post B")
    post_a = _create(post_domain, author, title="Post A")
    monkeypatch.setattr("inkwell.crud.post_crud.exists_post_slug", lambda *args, **kwargs: False)
    with pytest.raises(Conflict):
        post_domain.update_post(PostUpdateRequest(id=post_a.id, title="post b"), author)

    reloaded = post_domain.get_post_by_id(post_a.id, author)
    assert reloaded.title == "Post A"
    assert reloaded.slug == "post-a"


# ========== 更新 ==========
def test_update_post_by_non_owner_is_forbidden(post_domain, author, other_user):
    post = _create(post_domain, author)
    with pytest.raises(Forbidden):
        post_domain.update_post(PostUpdateRequest(id=post.id, title="Mine now"), other_user)


def test_update_missing_post_is_not_found(post_domain, author):
    with pytest.raises(NotFound):
        post_domain.update_post(PostUpdateRequest(id=uuid4(), title="Nope"), author)


def test_update_title_regenerates_slug(post_domain, author):
    post = _create(post_domain, author)
    updated = post_domain.update_post(PostUpdateRequest(id=post.id, title="Second Draft"), author)
    assert updated.slug == "second-draft"
    assert updated.updated_at >= updated.created_at


def test_rename_to_other_posts_slug_conflicts(post_domain, author):
    _create(post_domain, author, title="Post B")
    post_a = _create(post_domain, author, title="Post A")
    with pytest.raises(Conflict):
        post_domain.update_post(PostUpdateRequest(id=post_a.id, title="post b"), author)


def test_rename_to_own_slug_succeeds(post_domain, author):
    post = _create(post_domain, author, title="Hello World")
    updated = post_domain.update_post(PostUpdateRequest(id=post.id, title="Hello, World!"), author)
    assert updated.title == "Hello, World!"
    assert updated.slug == "hello-world"


def test_update_never_touches_author_snapshot(post_domain, author):
    post = _create(post_domain, author)
    author.display_name = "Alice Renamed"
    updated = post_domain.update_post(PostUpdateRequest(id=post.id, published=True), author)
    assert updated.author_name == "Alice"
    assert updated.published is True


def test_update_can_clear_optional_fields(post_domain, author):
    post = _create(post_domain, author, excerpt="short", cover_image="https://cdn.example.com/a.png")
    updated = post_domain.update_post(PostUpdateRequest(id=post.id, excerpt=None, cover_image=None), author)
    assert updated.excerpt is None
    assert updated.cover_image is None
    assert updated.title == "Hello World"


def test_update_without_category_ids_keeps_associations(post_domain, category_domain, author):
    tech = category_domain.create_category(CategoryCreateRequest(name="Tech"), author)
    post = _create(post_domain, author, category_ids=[tech.id])
    updated = post_domain.update_post(PostUpdateRequest(id=post.id, content="new body"), author)
    assert [c.name for c in updated.categories] == ["Tech"]


def test_update_with_empty_category_ids_clears_associations(post_domain, category_domain, db, author):
    tech = category_domain.create_category(CategoryCreateRequest(name="Tech"), author)
    post = _create(post_domain, author, category_ids=[tech.id])
    updated = post_domain.update_post(PostUpdateRequest(id=post.id, category_ids=[]), author)
    assert updated.categories == []
    assert db.query(PostCategories).count() == 0


def test_update_replaces_category_set(post_domain, category_domain, author):
    tech = category_domain.create_category(CategoryCreateRequest(name="Tech"), author)
    life = category_domain.create_category(CategoryCreateRequest(name="Life"), author)
    post = _create(post_domain, author, category_ids=[tech.id])
    updated = post_domain.update_post(PostUpdateRequest(id=post.id, category_ids=[life.id, tech.id]), author)
    assert sorted(c.name for c in updated.categories) == ["Life", "Tech"]


def test_failed_category_replacement_rolls_back_post_update(post_domain, category_domain, db, author):
    tech = category_domain.create_category(CategoryCreateRequest(name="Tech"), author)
    post = _create(post_domain, author, category_ids=[tech.id])
    with pytest.raises(NotFound):
        post_domain.update_post(
            PostUpdateRequest(id=post.id, title="Changed", category_ids=[uuid4()]),
            author,
        )
    reloaded = post_domain.get_post_by_id(post.id, author)
    assert reloaded.title == "Hello World"
    assert [c.name for c in reloaded.categories] == ["Tech"]


# ========== 削除 ==========
def test_delete_post_removes_associations_but_not_categories(post_domain, category_domain, db, author):
    tech = category_domain.create_category(CategoryCreateRequest(name="Tech"), author)
    post = _create(post_domain, author, category_ids=[tech.id])
    result = post_domain.delete_post(post.id, author)
    assert result.success is True
    assert db.query(Posts).count() == 0
    assert db.query(PostCategories).count() == 0
    assert category_domain.get_category_by_slug("tech").name == "Tech"


def test_delete_by_non_owner_is_forbidden(post_domain, author, other_user):
    post = _create(post_domain, author)
    with pytest.raises(Forbidden):
        post_domain.delete_post(post.id, other_user)


def test_delete_missing_post_is_not_found(post_domain, author):
    with pytest.raises(NotFound):
        post_domain.delete_post(uuid4(), author)


# ========== 取得 ==========
def test_get_by_slug_draft_visibility(post_domain, author, other_user):
    _create(post_domain, author, published=False)
    with pytest.raises(NotFound):
        post_domain.get_post_by_slug("hello-world")
    with pytest.raises(NotFound):
        post_domain.get_post_by_slug("hello-world", other_user)
    assert post_domain.get_post_by_slug("hello-world", author).title == "Hello World"


def test_get_by_slug_reaches_own_archived_post(post_domain, author):
    post = _create(post_domain, author)
    post_domain.update_post(PostUpdateRequest(id=post.id, archived=True), author)
    assert post_domain.get_post_by_slug("hello-world", author).archived is True


def test_get_by_id_checks_existence_then_ownership(post_domain, author, other_user):
    post = _create(post_domain, author)
    with pytest.raises(Forbidden):
        post_domain.get_post_by_id(post.id, other_user)
    with pytest.raises(NotFound):
        post_domain.get_post_by_id(uuid4(), other_user)
    assert post_domain.get_post_by_id(post.id, author).id == post.id


def test_get_user_posts_returns_every_state_newest_update_first(post_domain, author, other_user):
    first = _create(post_domain, author, title="First")
    _create(post_domain, author, title="Second", published=True)
    _create(post_domain, other_user, title="Someone else")
    post_domain.update_post(PostUpdateRequest(id=first.id, archived=True), author)

    posts = post_domain.get_user_posts(author)
    assert [p.title for p in posts] == ["First", "Second"]


# ========== 一覧 ==========
def test_archived_posts_never_listed(post_domain, category_domain, author):
    tech = category_domain.create_category(CategoryCreateRequest(name="Tech"), author)
    post = _create(post_domain, author, published=True, category_ids=[tech.id])
    post_domain.update_post(PostUpdateRequest(id=post.id, archived=True), author)

    queries = [
        PostListQuery(),
        PostListQuery(published=True),
        PostListQuery(category_id=tech.id),
        PostListQuery(author_id=author.id),
        PostListQuery(search="hello"),
        PostListQuery(published=True, category_id=tech.id, author_id=author.id, search="body"),
    ]
    for query in queries:
        assert post_domain.list_posts(query) == []
        assert post_domain.count_posts(query) == 0


def test_list_filters_are_conjunctive(post_domain, category_domain, author, other_user):
    tech = category_domain.create_category(CategoryCreateRequest(name="Tech"), author)
    _create(post_domain, author, title="Python tips", published=True, category_ids=[tech.id])
    _create(post_domain, author, title="Python draft", published=False, category_ids=[tech.id])
    _create(post_domain, other_user, title="Python elsewhere", published=True)

    posts = post_domain.list_posts(
        PostListQuery(published=True, category_id=tech.id, author_id=author.id, search="PYTHON")
    )
    assert [p.title for p in posts] == ["Python tips"]


def test_list_search_matches_title_content_or_excerpt(post_domain, author):
    _create(post_domain, author, title="Alpha", content="nothing here")
    _create(post_domain, author, title="Beta", content="mentions Needle inside")
    _create(post_domain, author, title="Gamma", content="plain", excerpt="a needle excerpt")
    titles = sorted(p.title for p in post_domain.list_posts(PostListQuery(search="needle")))
    assert titles == ["Beta", "Gamma"]


def test_list_search_treats_wildcards_literally(post_domain, author):
    _create(post_domain, author, title="Fifty", content="50% off")
    _create(post_domain, author, title="Other", content="nothing")
    titles = [p.title for p in post_domain.list_posts(PostListQuery(search="%"))]
    assert titles == ["Fifty"]


def test_list_by_category_without_posts_is_empty(post_domain, category_domain, author):
    _create(post_domain, author, published=True)
    empty = category_domain.create_category(CategoryCreateRequest(name="Empty"), author)
    assert post_domain.list_posts(PostListQuery(category_id=empty.id)) == []
    assert post_domain.count_posts(PostListQuery(category_id=empty.id)) == 0


def test_list_orders_by_created_at_then_id_and_paginates(post_domain, db, author):
    created = [_create(post_domain, author, title=f"Post {i}") for i in range(5)]
    base = datetime(2025, 1, 1, 12, 0, 0)
    # 2件は同じ作成日時にしてIDの降順で並ぶことを確認する
    offsets = [0, 1, 1, 2, 3]
    for post, minutes in zip(created, offsets):
        db.query(Posts).filter(Posts.id == post.id).update({"created_at": base + timedelta(minutes=minutes)})
    db.commit()

    tied = sorted([created[1].id, created[2].id], reverse=True)
    expected = [created[4].id, created[3].id, *tied, created[0].id]

    page1 = post_domain.list_posts(PostListQuery(limit=2, offset=0))
    page2 = post_domain.list_posts(PostListQuery(limit=2, offset=2))
    page3 = post_domain.list_posts(PostListQuery(limit=2, offset=4))
    assert [p.id for p in page1 + page2 + page3] == expected
    assert post_domain.count_posts(PostListQuery(limit=2)) == 5


def test_post_output_includes_reading_time_and_preview(post_domain, author):
    post = _create(post_domain, author, content="word " * 450)
    assert post.reading_time == 3
    assert post.preview.endswith("…")
    assert len(post.preview) == 200
