"""follows router."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from palytt_client.procedures.base import mutation, query
from palytt_client.procedures.models import (
    CursorPage,
    Follow,
    FollowStats,
    FollowUser,
    SuccessResponse,
    UserInfo,
    WireInput,
    WireModel,
)


class UserIdInput(WireInput):
    user_id: str


class FollowListInput(WireInput):
    """``user_id`` of None means the signed-in user."""

    user_id: str | None = None
    limit: int = 50
    cursor: str | None = None


class FollowingPage(CursorPage):
    items_field: ClassVar[str] = "following"

    following: list[FollowUser] = Field(default_factory=list)


class FollowersPage(CursorPage):
    items_field: ClassVar[str] = "followers"

    followers: list[FollowUser] = Field(default_factory=list)


class IsFollowingInput(WireInput):
    follower_id: str
    following_id: str


class IsFollowingResult(WireModel):
    is_following: bool


class GetMutualFollowsInput(WireInput):
    user_id1: str
    user_id2: str
    limit: int = 20


class MutualFollowsResult(WireModel):
    mutual_follows: list[UserInfo]
    count: int


class GetSuggestedFollowsInput(WireInput):
    limit: int = 10


class SuggestedFollowsResult(WireModel):
    suggestions: list[UserInfo]


FOLLOW = mutation("follows.follow", UserIdInput, Follow, protected=True)
UNFOLLOW = mutation("follows.unfollow", UserIdInput, SuccessResponse, protected=True)
GET_FOLLOWING = query("follows.getFollowing", FollowListInput, FollowingPage)
GET_FOLLOWERS = query("follows.getFollowers", FollowListInput, FollowersPage)
IS_FOLLOWING = query("follows.isFollowing", IsFollowingInput, IsFollowingResult)
GET_FOLLOW_STATS = query("follows.getFollowStats", UserIdInput, FollowStats)
GET_MUTUAL_FOLLOWS = query("follows.getMutualFollows", GetMutualFollowsInput, MutualFollowsResult)
GET_SUGGESTED_FOLLOWS = query(
    "follows.getSuggestedFollows", GetSuggestedFollowsInput, SuggestedFollowsResult, protected=True
)

PROCEDURES = [
    FOLLOW,
    UNFOLLOW,
    GET_FOLLOWING,
    GET_FOLLOWERS,
    IS_FOLLOWING,
    GET_FOLLOW_STATS,
    GET_MUTUAL_FOLLOWS,
    GET_SUGGESTED_FOLLOWS,
]
