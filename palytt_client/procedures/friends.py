"""friends router. User ids here are Clerk ids."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from palytt_client.procedures.base import mutation, query
from palytt_client.procedures.models import (
    CursorPage,
    Friend,
    FriendRequestFilter,
    FriendSuggestion,
    FriendUser,
    SuccessResponse,
    UserInfo,
    WireInput,
    WireModel,
)


class SendRequestInput(WireInput):
    receiver_id: str


class RequestIdInput(WireInput):
    request_id: str


class GetFriendsInput(WireInput):
    user_id: str | None = None
    limit: int = 50
    cursor: str | None = None


class FriendsPage(CursorPage):
    items_field: ClassVar[str] = "friends"

    friends: list[FriendUser] = Field(default_factory=list)


class GetPendingRequestsInput(WireInput):
    type: FriendRequestFilter = FriendRequestFilter.ALL
    limit: int = 20
    cursor: str | None = None


class PendingRequestsPage(CursorPage):
    items_field: ClassVar[str] = "requests"

    requests: list[Friend] = Field(default_factory=list)


class UserPairInput(WireInput):
    user_id1: str
    user_id2: str


class AreFriendsResult(WireModel):
    are_friends: bool


class FriendIdInput(WireInput):
    friend_id: str


class UserIdInput(WireInput):
    user_id: str


class GetMutualFriendsInput(UserPairInput):
    limit: int = 10


class MutualFriendsResult(WireModel):
    mutual_friends: list[UserInfo]
    total_count: int


class GetFriendSuggestionsInput(WireInput):
    limit: int = 20
    exclude_requested: bool = True


class FriendSuggestionsResult(WireModel):
    suggestions: list[FriendSuggestion]


SEND_REQUEST = mutation("friends.sendRequest", SendRequestInput, Friend, protected=True)
ACCEPT_REQUEST = mutation("friends.acceptRequest", RequestIdInput, Friend, protected=True)
REJECT_REQUEST = mutation("friends.rejectRequest", RequestIdInput, SuccessResponse, protected=True)
GET_FRIENDS = query("friends.getFriends", GetFriendsInput, FriendsPage)
GET_PENDING_REQUESTS = query(
    "friends.getPendingRequests", GetPendingRequestsInput, PendingRequestsPage, protected=True
)
ARE_FRIENDS = query("friends.areFriends", UserPairInput, AreFriendsResult)
REMOVE_FRIEND = mutation("friends.removeFriend", FriendIdInput, SuccessResponse, protected=True)
BLOCK_USER = mutation("friends.blockUser", UserIdInput, SuccessResponse, protected=True)
GET_MUTUAL_FRIENDS = query("friends.getMutualFriends", GetMutualFriendsInput, MutualFriendsResult)
GET_FRIEND_SUGGESTIONS = query(
    "friends.getFriendSuggestions", GetFriendSuggestionsInput, FriendSuggestionsResult, protected=True
)

PROCEDURES = [
    SEND_REQUEST,
    ACCEPT_REQUEST,
    REJECT_REQUEST,
    GET_FRIENDS,
    GET_PENDING_REQUESTS,
    ARE_FRIENDS,
    REMOVE_FRIEND,
    BLOCK_USER,
    GET_MUTUAL_FRIENDS,
    GET_FRIEND_SUGGESTIONS,
]
