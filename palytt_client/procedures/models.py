"""
Wire models shared by the procedure catalog.

Field names are snake_case in Python and camelCase on the wire. Unknown
response fields are ignored so the backend can add fields freely; input
models reject unknown fields.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class WireInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class EmptyInput(WireInput):
    """Input for procedures that take no parameters; encodes as ``{}``."""


class CursorPage(WireModel):
    """A page of a cursor-paginated list; ``next_cursor`` is None on the last page."""

    items_field: ClassVar[str] = "items"

    next_cursor: str | None = None

    @property
    def items(self) -> list[Any]:
        return list(getattr(self, self.items_field))

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


class SuccessResponse(WireModel):
    success: bool
    count: int | None = None
    message: str | None = None


# -- enums --------------------------------------------------------------


class NotificationType(str, Enum):
    POST_LIKE = "POST_LIKE"
    COMMENT = "COMMENT"
    COMMENT_LIKE = "COMMENT_LIKE"
    FOLLOW = "FOLLOW"
    FRIEND_REQUEST = "FRIEND_REQUEST"
    FRIEND_ACCEPTED = "FRIEND_ACCEPTED"
    FRIEND_POST = "FRIEND_POST"
    MESSAGE = "MESSAGE"
    POST_MENTION = "POST_MENTION"
    GENERAL = "GENERAL"


class MessageType(str, Enum):
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    FILE = "FILE"
    POST_SHARE = "POST_SHARE"
    PLACE_SHARE = "PLACE_SHARE"
    LINK_SHARE = "LINK_SHARE"


class ChatroomType(str, Enum):
    DIRECT = "DIRECT"
    GROUP = "GROUP"


class FriendStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    BLOCKED = "BLOCKED"


class FriendRequestFilter(str, Enum):
    SENT = "sent"
    RECEIVED = "received"
    ALL = "all"


# -- users --------------------------------------------------------------


class UserInfo(WireModel):
    """Minimal user record embedded in other entities."""

    id: str
    clerk_id: str
    username: str | None = None
    name: str | None = None
    profile_image: str | None = None
    bio: str | None = None


class User(WireModel):
    id: str
    clerk_id: str
    username: str | None = None
    name: str | None = None
    email: str | None = None
    bio: str | None = None
    profile_image: str | None = None
    website: str | None = None
    follower_count: int | None = None
    following_count: int | None = None
    posts_count: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# -- posts --------------------------------------------------------------


class Post(WireModel):
    id: str
    user_id: str
    title: str | None = None
    caption: str | None = None
    media_urls: list[str] | None = None
    rating: float | None = None
    menu_items: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    location_name: str | None = None
    location_address: str | None = None
    location_city: str | None = None
    location_state: str | None = None
    location_country: str | None = None
    location_postal_code: str | None = None
    location_latitude: float | None = None
    location_longitude: float | None = None
    likes_count: int | None = None
    comments_count: int | None = None
    saves_count: int | None = None
    views_count: int | None = None
    is_public: bool | None = None
    is_deleted: bool | None = None
    author: UserInfo | None = None


class PostPreview(WireModel):
    id: str
    caption: str | None = None
    media_urls: list[str] | None = None


# -- social -------------------------------------------------------------


class Friend(WireModel):
    id: str
    sender_id: str
    receiver_id: str
    status: FriendStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sender: UserInfo | None = None
    receiver: UserInfo | None = None


class FriendUser(UserInfo):
    friendship_id: str | None = None
    friends_since: datetime | None = None


class FriendSuggestion(UserInfo):
    follower_count: int | None = None
    mutual_friends_count: int = 0
    connection_reason: str = ""


class Follow(WireModel):
    id: str
    follower_id: str
    following_id: str
    created_at: datetime | None = None
    follower: UserInfo | None = None
    following: UserInfo | None = None


class FollowUser(UserInfo):
    follower_count: int | None = None
    following_count: int | None = None
    posts_count: int | None = None
    followed_at: datetime | None = None


class FollowStats(WireModel):
    follower_count: int
    following_count: int
    posts_count: int


# -- comments -----------------------------------------------------------


class Comment(WireModel):
    id: str
    post_id: str
    author_id: str
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    author: UserInfo | None = None
    post: PostPreview | None = None


# -- messaging ----------------------------------------------------------


class LinkPreview(WireModel):
    title: str
    url: str
    description: str | None = None
    image_url: str | None = None


class MessageMetadata(WireModel):
    shared_content_id: str | None = None
    link_preview: LinkPreview | None = None


class Message(WireModel):
    id: str
    chatroom_id: str
    sender_id: str
    content: str
    message_type: MessageType
    media_url: str | None = None
    metadata: MessageMetadata | None = None
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sender: UserInfo | None = None


class ChatroomParticipant(WireModel):
    id: str
    chatroom_id: str
    user_id: str
    is_admin: bool = False
    joined_at: datetime | None = None
    left_at: datetime | None = None
    last_read_at: datetime | None = None
    user: UserInfo | None = None


class Chatroom(WireModel):
    id: str
    type: ChatroomType
    name: str | None = None
    description: str | None = None
    image_url: str | None = None
    last_message_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    participants: list[ChatroomParticipant] | None = None
    messages: list[Message] | None = None
    last_message: Message | None = None
    unread_count: int | None = None
    other_participants: list[UserInfo] | None = None

    @model_validator(mode="before")
    @classmethod
    def _lift_message_count(cls, data: Any) -> Any:
        # Prisma ``_count.messages`` is the unread count.
        if isinstance(data, dict):
            count = data.get("_count")
            if isinstance(count, dict) and count.get("messages") is not None:
                data = {**data, "unreadCount": count["messages"]}
        return data


# -- notifications ------------------------------------------------------


class NotificationMetadata(WireModel):
    post_id: str | None = None
    comment_id: str | None = None
    friend_request_id: str | None = None
    user_id: str | None = None


class NotificationSender(WireModel):
    id: str = Field(alias="_id")
    clerk_id: str
    name: str | None = None
    username: str | None = None
    email: str | None = None
    bio: str | None = None
    profile_image: str | None = None
    followers_count: int | None = None
    following_count: int | None = None
    posts_count: int | None = None
    is_verified: bool | None = None
    is_active: bool | None = None
    created_at: int | None = None
    updated_at: int | None = None


class Notification(WireModel):
    """Notification record; timestamps are Unix epoch milliseconds."""

    id: str = Field(alias="_id")
    recipient_id: str
    sender_id: str | None = None
    type: NotificationType
    title: str
    message: str
    metadata: NotificationMetadata | None = None
    is_read: bool = False
    created_at: int
    updated_at: int
    sender: NotificationSender | None = None


class NotificationSettings(WireModel):
    email_notifications: bool
    push_notifications: bool
    likes: bool
    comments: bool
    follows: bool
    friend_requests: bool
    messages: bool


# -- lists & places -----------------------------------------------------


class Place(WireModel):
    id: str
    name: str
    google_place_id: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    phone_number: str | None = None
    website: str | None = None
    price_level: int | None = None
    rating: float | None = None
    user_ratings_total: int | None = None
    types: list[str] | None = None
    photo_references: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ListItem(WireModel):
    id: str
    list_id: str
    place_id: str
    notes: str | None = None
    added_at: datetime | None = None
    place: Place | None = None


class SavedList(WireModel):
    """A user's curated list of places."""

    id: str
    user_id: str
    name: str
    description: str | None = None
    is_public: bool = True
    cover_image_url: str | None = None
    place_count: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    items: list[ListItem] | None = None
