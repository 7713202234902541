"""posts router."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from palytt_client.procedures.base import mutation, query
from palytt_client.procedures.models import CursorPage, Post, WireInput, WireModel


class GetRecentPostsInput(WireInput):
    limit: int = 20
    page: int = 1


class RecentPostsPage(WireModel):
    """Page-numbered listing; the only posts query without a cursor."""

    posts: list[Post]
    total_count: int
    page: int
    total_pages: int


class CursorInput(WireInput):
    limit: int = 20
    cursor: str | None = None


class PostsPage(CursorPage):
    items_field: ClassVar[str] = "posts"

    posts: list[Post] = Field(default_factory=list)


class GetPostByIdInput(WireInput):
    id: str


class GetPostsByUserIdInput(CursorInput):
    user_id: str


class CreatePostInput(WireInput):
    title: str | None = None
    caption: str | None = None
    media_urls: list[str] | None = None
    rating: float | None = None
    menu_items: list[str] | None = None
    location_name: str | None = None
    location_address: str | None = None
    location_city: str | None = None
    location_state: str | None = None
    location_country: str | None = None
    location_postal_code: str | None = None
    location_latitude: float | None = None
    location_longitude: float | None = None
    is_public: bool | None = None


class PostIdInput(WireInput):
    post_id: str


class LikeResult(WireModel):
    liked: bool
    likes_count: int


class SaveResult(WireModel):
    saved: bool
    saves_count: int


class SearchPostsInput(CursorInput):
    query: str


GET_RECENT_POSTS = query("posts.getRecentPosts", GetRecentPostsInput, RecentPostsPage)
GET_FEED_POSTS = query("posts.getFeedPosts", CursorInput, PostsPage, protected=True)
GET_POST_BY_ID = query("posts.getPostById", GetPostByIdInput, Post | None)
GET_POSTS_BY_USER_ID = query("posts.getPostsByUserId", GetPostsByUserIdInput, PostsPage)
CREATE_POST = mutation("posts.createPost", CreatePostInput, Post, protected=True)
LIKE_POST = mutation("posts.likePost", PostIdInput, LikeResult, protected=True)
SAVE_POST = mutation("posts.savePost", PostIdInput, SaveResult, protected=True)
GET_SAVED_POSTS = query("posts.getSavedPosts", CursorInput, PostsPage, protected=True)
SEARCH_POSTS = query("posts.searchPosts", SearchPostsInput, PostsPage)

PROCEDURES = [
    GET_RECENT_POSTS,
    GET_FEED_POSTS,
    GET_POST_BY_ID,
    GET_POSTS_BY_USER_ID,
    CREATE_POST,
    LIKE_POST,
    SAVE_POST,
    GET_SAVED_POSTS,
    SEARCH_POSTS,
]
