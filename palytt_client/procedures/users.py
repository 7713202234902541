"""users router."""

from __future__ import annotations

from palytt_client.procedures.base import mutation, query
from palytt_client.procedures.models import User, WireInput


class GetAllUsersInput(WireInput):
    limit: int = 20
    cursor: str | None = None


class ClerkIdInput(WireInput):
    clerk_id: str


class UsernameInput(WireInput):
    username: str


class SearchUsersInput(WireInput):
    query: str
    limit: int = 20


class CreateUserInput(WireInput):
    clerk_id: str
    email: str | None = None
    username: str | None = None
    name: str | None = None
    profile_image: str | None = None


class UpdateUserInput(WireInput):
    clerk_id: str
    username: str | None = None
    name: str | None = None
    bio: str | None = None
    profile_image: str | None = None
    website: str | None = None


GET_ALL = query("users.getAll", GetAllUsersInput, list[User])
GET_USER_BY_CLERK_ID = query("users.getUserByClerkId", ClerkIdInput, User | None)
GET_BY_USERNAME = query("users.getByUsername", UsernameInput, User | None)
SEARCH_USERS = query("users.searchUsers", SearchUsersInput, list[User])
CREATE_USER = mutation("users.createUser", CreateUserInput, User)
UPDATE_USER = mutation("users.updateUser", UpdateUserInput, User)

PROCEDURES = [GET_ALL, GET_USER_BY_CLERK_ID, GET_BY_USERNAME, SEARCH_USERS, CREATE_USER, UPDATE_USER]
