"""messages router: chatrooms, messages and group administration."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from palytt_client.procedures.base import mutation, query
from palytt_client.procedures.models import (
    Chatroom,
    ChatroomType,
    CursorPage,
    EmptyInput,
    Message,
    MessageType,
    SuccessResponse,
    WireInput,
    WireModel,
)


class GetChatroomsInput(WireInput):
    limit: int = 20
    cursor: str | None = None


class ChatroomsPage(CursorPage):
    items_field: ClassVar[str] = "chatrooms"

    chatrooms: list[Chatroom] = Field(default_factory=list)


class CreateChatroomInput(WireInput):
    """``participant_id`` for direct chats, ``participant_ids`` for groups."""

    type: ChatroomType
    participant_id: str | None = None
    participant_ids: list[str] | None = None
    name: str | None = None
    description: str | None = None
    image_url: str | None = None


class LinkPreviewInput(WireInput):
    title: str
    url: str
    description: str | None = None
    image_url: str | None = None


class SendMessageInput(WireInput):
    chatroom_id: str
    content: str
    message_type: MessageType = MessageType.TEXT
    media_url: str | None = None
    shared_content_id: str | None = None
    link_preview: LinkPreviewInput | None = None


class GetMessagesInput(WireInput):
    chatroom_id: str
    limit: int = 50
    cursor: str | None = None


class MessagesPage(CursorPage):
    items_field: ClassVar[str] = "messages"

    messages: list[Message] = Field(default_factory=list)


class MarkMessagesAsReadInput(WireInput):
    """Omitting ``message_ids`` marks the whole chatroom as read."""

    chatroom_id: str
    message_ids: list[str] | None = None


class UnreadCountResult(WireModel):
    unread_count: int


class ChatroomIdInput(WireInput):
    chatroom_id: str


class AddParticipantsInput(WireInput):
    chatroom_id: str
    user_ids: list[str]


class AddParticipantsResult(WireModel):
    success: bool
    added: int


class ChatroomMemberInput(WireInput):
    chatroom_id: str
    user_id: str


class UpdateGroupSettingsInput(WireInput):
    chatroom_id: str
    name: str | None = None
    description: str | None = None
    image_url: str | None = None


class GetSharedMediaInput(WireInput):
    chatroom_id: str
    message_type: MessageType | None = None
    limit: int = 20
    cursor: str | None = None


GET_CHATROOMS = query("messages.getChatrooms", GetChatroomsInput, ChatroomsPage, protected=True)
CREATE_CHATROOM = mutation("messages.createChatroom", CreateChatroomInput, Chatroom, protected=True)
SEND_MESSAGE = mutation("messages.sendMessage", SendMessageInput, Message, protected=True)
GET_MESSAGES = query("messages.getMessages", GetMessagesInput, MessagesPage, protected=True)
MARK_MESSAGES_AS_READ = mutation(
    "messages.markMessagesAsRead", MarkMessagesAsReadInput, SuccessResponse, protected=True
)
GET_UNREAD_COUNT = query("messages.getUnreadCount", EmptyInput, UnreadCountResult, protected=True)
LEAVE_CHATROOM = mutation("messages.leaveChatroom", ChatroomIdInput, SuccessResponse, protected=True)
ADD_PARTICIPANTS = mutation(
    "messages.addParticipants", AddParticipantsInput, AddParticipantsResult, protected=True
)
REMOVE_PARTICIPANT = mutation(
    "messages.removeParticipant", ChatroomMemberInput, SuccessResponse, protected=True
)
MAKE_ADMIN = mutation("messages.makeAdmin", ChatroomMemberInput, SuccessResponse, protected=True)
UPDATE_GROUP_SETTINGS = mutation(
    "messages.updateGroupSettings", UpdateGroupSettingsInput, Chatroom, protected=True
)
GET_SHARED_MEDIA = query("messages.getSharedMedia", GetSharedMediaInput, MessagesPage, protected=True)

PROCEDURES = [
    GET_CHATROOMS,
    CREATE_CHATROOM,
    SEND_MESSAGE,
    GET_MESSAGES,
    MARK_MESSAGES_AS_READ,
    GET_UNREAD_COUNT,
    LEAVE_CHATROOM,
    ADD_PARTICIPANTS,
    REMOVE_PARTICIPANT,
    MAKE_ADMIN,
    UPDATE_GROUP_SETTINGS,
    GET_SHARED_MEDIA,
]
