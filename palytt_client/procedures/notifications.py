"""notifications router."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from palytt_client.procedures.base import mutation, query
from palytt_client.procedures.models import (
    CursorPage,
    EmptyInput,
    Notification,
    NotificationSettings,
    NotificationType,
    SuccessResponse,
    WireInput,
    WireModel,
)


class GetNotificationsInput(WireInput):
    limit: int = 20
    cursor: str | None = None
    type: NotificationType | None = None
    types: list[NotificationType] | None = None
    unread_only: bool = False


class NotificationsPage(CursorPage):
    items_field: ClassVar[str] = "notifications"

    notifications: list[Notification] = Field(default_factory=list)


class MarkAsReadInput(WireInput):
    """Omitting ``notification_ids`` marks everything as read."""

    notification_ids: list[str] | None = None


class UnreadCountResult(WireModel):
    count: int


class DeleteNotificationsInput(WireInput):
    notification_ids: list[str]


class UpdateSettingsInput(WireInput):
    email_notifications: bool | None = None
    push_notifications: bool | None = None
    likes: bool | None = None
    comments: bool | None = None
    follows: bool | None = None
    friend_requests: bool | None = None
    messages: bool | None = None


class UpdateSettingsResult(WireModel):
    success: bool
    settings: NotificationSettings


class GetNotificationsByTypeInput(WireInput):
    days: int = 7


class NotificationsByType(WireModel):
    grouped: dict[str, list[Notification]] = Field(default_factory=dict)


GET_NOTIFICATIONS = query(
    "notifications.getNotifications", GetNotificationsInput, NotificationsPage, protected=True
)
MARK_AS_READ = mutation("notifications.markAsRead", MarkAsReadInput, SuccessResponse, protected=True)
MARK_ALL_AS_READ = mutation("notifications.markAllAsRead", EmptyInput, SuccessResponse, protected=True)
GET_UNREAD_COUNT = query("notifications.getUnreadCount", EmptyInput, UnreadCountResult, protected=True)
DELETE_NOTIFICATIONS = mutation(
    "notifications.deleteNotifications", DeleteNotificationsInput, SuccessResponse, protected=True
)
CLEAR_ALL = mutation("notifications.clearAll", EmptyInput, SuccessResponse, protected=True)
GET_SETTINGS = query("notifications.getSettings", EmptyInput, NotificationSettings, protected=True)
UPDATE_SETTINGS = mutation(
    "notifications.updateSettings", UpdateSettingsInput, UpdateSettingsResult, protected=True
)
GET_NOTIFICATIONS_BY_TYPE = query(
    "notifications.getNotificationsByType",
    GetNotificationsByTypeInput,
    NotificationsByType,
    protected=True,
)

PROCEDURES = [
    GET_NOTIFICATIONS,
    MARK_AS_READ,
    MARK_ALL_AS_READ,
    GET_UNREAD_COUNT,
    DELETE_NOTIFICATIONS,
    CLEAR_ALL,
    GET_SETTINGS,
    UPDATE_SETTINGS,
    GET_NOTIFICATIONS_BY_TYPE,
]
