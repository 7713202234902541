"""
Convenience methods over the procedure catalog.

``ProcedureShortcuts`` only builds inputs and delegates to ``query`` /
``mutate``; any class providing those two coroutines (the real client, the
retrying wrapper, the mock) gets the whole domain API.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator

from palytt_client.errors import APIError
from palytt_client.procedures import (
    comments,
    follows,
    friends,
    lists,
    messages,
    notifications,
    places,
    posts,
    users,
)
from palytt_client.procedures.base import Procedure, build_input
from palytt_client.procedures.models import (
    Chatroom,
    ChatroomType,
    Comment,
    CursorPage,
    Follow,
    FollowStats,
    Friend,
    FriendRequestFilter,
    ListItem,
    Message,
    MessageType,
    NotificationSettings,
    NotificationType,
    Place,
    Post,
    SavedList,
    SuccessResponse,
    User,
)


class ProcedureShortcuts(ABC):
    """Domain API mixin; subclasses provide ``query`` and ``mutate``."""

    @abstractmethod
    async def query(self, procedure: Procedure[Any, Any], input: Any = None) -> Any:
        """Run a query procedure."""

    @abstractmethod
    async def mutate(self, procedure: Procedure[Any, Any], input: Any = None) -> Any:
        """Run a mutation procedure."""

    async def paginate(
        self, procedure: Procedure[Any, Any], input: Any = None
    ) -> AsyncIterator[CursorPage]:
        """
        Yield successive pages of a cursor-paginated query.

        Stops when ``next_cursor`` is null/absent, or repeats the cursor that
        produced the current page.
        """
        output_type = procedure.output_type
        if not (isinstance(output_type, type) and issubclass(output_type, CursorPage)):
            raise APIError.invalid_data({"reason": "not_paginated", "procedure": procedure.name})
        if "cursor" not in procedure.input_type.model_fields:
            raise APIError.invalid_data({"reason": "not_paginated", "procedure": procedure.name})

        if input is None:
            params: dict[str, Any] = {}
        elif isinstance(input, dict):
            params = dict(input)
        else:
            params = input.model_dump(exclude_none=True)
        cursor = params.pop("cursor", None)
        while True:
            page = await self.query(procedure, {**params, "cursor": cursor})
            yield page
            if page.next_cursor is None or page.next_cursor == cursor:
                return
            cursor = page.next_cursor

    # -- posts ------------------------------------------------------------

    async def get_recent_posts(self, limit: int = 20, page: int = 1) -> posts.RecentPostsPage:
        return await self.query(posts.GET_RECENT_POSTS, build_input(posts.GetRecentPostsInput, limit=limit, page=page))

    async def get_feed_posts(self, limit: int = 20, cursor: str | None = None) -> posts.PostsPage:
        return await self.query(posts.GET_FEED_POSTS, build_input(posts.CursorInput, limit=limit, cursor=cursor))

    async def get_post_by_id(self, id: str) -> Post | None:
        return await self.query(posts.GET_POST_BY_ID, build_input(posts.GetPostByIdInput, id=id))

    async def get_posts_by_user_id(
        self, user_id: str, limit: int = 20, cursor: str | None = None
    ) -> posts.PostsPage:
        return await self.query(
            posts.GET_POSTS_BY_USER_ID,
            build_input(posts.GetPostsByUserIdInput, user_id=user_id, limit=limit, cursor=cursor),
        )

    async def create_post(self, **fields: Any) -> Post:
        return await self.mutate(posts.CREATE_POST, build_input(posts.CreatePostInput, **fields))

    async def like_post(self, post_id: str) -> posts.LikeResult:
        return await self.mutate(posts.LIKE_POST, build_input(posts.PostIdInput, post_id=post_id))

    async def save_post(self, post_id: str) -> posts.SaveResult:
        return await self.mutate(posts.SAVE_POST, build_input(posts.PostIdInput, post_id=post_id))

    async def get_saved_posts(self, limit: int = 20, cursor: str | None = None) -> posts.PostsPage:
        return await self.query(posts.GET_SAVED_POSTS, build_input(posts.CursorInput, limit=limit, cursor=cursor))

    async def search_posts(
        self, query: str, limit: int = 20, cursor: str | None = None
    ) -> posts.PostsPage:
        return await self.query(
            posts.SEARCH_POSTS, build_input(posts.SearchPostsInput, query=query, limit=limit, cursor=cursor)
        )

    # -- users ------------------------------------------------------------

    async def get_all_users(self, limit: int = 20, cursor: str | None = None) -> list[User]:
        return await self.query(users.GET_ALL, build_input(users.GetAllUsersInput, limit=limit, cursor=cursor))

    async def get_user_by_clerk_id(self, clerk_id: str) -> User | None:
        return await self.query(users.GET_USER_BY_CLERK_ID, build_input(users.ClerkIdInput, clerk_id=clerk_id))

    async def get_user_by_username(self, username: str) -> User | None:
        return await self.query(users.GET_BY_USERNAME, build_input(users.UsernameInput, username=username))

    async def search_users(self, query: str, limit: int = 20) -> list[User]:
        return await self.query(users.SEARCH_USERS, build_input(users.SearchUsersInput, query=query, limit=limit))

    async def create_user(
        self,
        clerk_id: str,
        email: str | None = None,
        username: str | None = None,
        name: str | None = None,
        profile_image: str | None = None,
    ) -> User:
        return await self.mutate(
            users.CREATE_USER,
            build_input(
                users.CreateUserInput,
                clerk_id=clerk_id,
                email=email,
                username=username,
                name=name,
                profile_image=profile_image,
            ),
        )

    async def update_user(self, clerk_id: str, **fields: Any) -> User:
        return await self.mutate(users.UPDATE_USER, build_input(users.UpdateUserInput, clerk_id=clerk_id, **fields))

    # -- friends ----------------------------------------------------------

    async def send_friend_request(self, receiver_id: str) -> Friend:
        return await self.mutate(friends.SEND_REQUEST, build_input(friends.SendRequestInput, receiver_id=receiver_id))

    async def accept_friend_request(self, request_id: str) -> Friend:
        return await self.mutate(friends.ACCEPT_REQUEST, build_input(friends.RequestIdInput, request_id=request_id))

    async def reject_friend_request(self, request_id: str) -> SuccessResponse:
        return await self.mutate(friends.REJECT_REQUEST, build_input(friends.RequestIdInput, request_id=request_id))

    async def get_friends(
        self, user_id: str | None = None, limit: int = 50, cursor: str | None = None
    ) -> friends.FriendsPage:
        return await self.query(
            friends.GET_FRIENDS, build_input(friends.GetFriendsInput, user_id=user_id, limit=limit, cursor=cursor)
        )

    async def get_pending_friend_requests(
        self,
        type: FriendRequestFilter = FriendRequestFilter.ALL,
        limit: int = 20,
        cursor: str | None = None,
    ) -> friends.PendingRequestsPage:
        return await self.query(
            friends.GET_PENDING_REQUESTS,
            build_input(friends.GetPendingRequestsInput, type=type, limit=limit, cursor=cursor),
        )

    async def are_friends(self, user_id1: str, user_id2: str) -> bool:
        result = await self.query(
            friends.ARE_FRIENDS, build_input(friends.UserPairInput, user_id1=user_id1, user_id2=user_id2)
        )
        return result.are_friends

    async def remove_friend(self, friend_id: str) -> SuccessResponse:
        return await self.mutate(friends.REMOVE_FRIEND, build_input(friends.FriendIdInput, friend_id=friend_id))

    async def block_user(self, user_id: str) -> SuccessResponse:
        return await self.mutate(friends.BLOCK_USER, build_input(friends.UserIdInput, user_id=user_id))

    async def get_mutual_friends(
        self, user_id1: str, user_id2: str, limit: int = 10
    ) -> friends.MutualFriendsResult:
        return await self.query(
            friends.GET_MUTUAL_FRIENDS,
            build_input(friends.GetMutualFriendsInput, user_id1=user_id1, user_id2=user_id2, limit=limit),
        )

    async def get_friend_suggestions(
        self, limit: int = 20, exclude_requested: bool = True
    ) -> friends.FriendSuggestionsResult:
        return await self.query(
            friends.GET_FRIEND_SUGGESTIONS,
            build_input(friends.GetFriendSuggestionsInput, limit=limit, exclude_requested=exclude_requested),
        )

    # -- follows ----------------------------------------------------------

    async def follow(self, user_id: str) -> Follow:
        return await self.mutate(follows.FOLLOW, build_input(follows.UserIdInput, user_id=user_id))

    async def unfollow(self, user_id: str) -> SuccessResponse:
        return await self.mutate(follows.UNFOLLOW, build_input(follows.UserIdInput, user_id=user_id))

    async def get_following(
        self, user_id: str | None = None, limit: int = 50, cursor: str | None = None
    ) -> follows.FollowingPage:
        return await self.query(
            follows.GET_FOLLOWING, build_input(follows.FollowListInput, user_id=user_id, limit=limit, cursor=cursor)
        )

    async def get_followers(
        self, user_id: str | None = None, limit: int = 50, cursor: str | None = None
    ) -> follows.FollowersPage:
        return await self.query(
            follows.GET_FOLLOWERS, build_input(follows.FollowListInput, user_id=user_id, limit=limit, cursor=cursor)
        )

    async def is_following(self, follower_id: str, following_id: str) -> bool:
        result = await self.query(
            follows.IS_FOLLOWING,
            build_input(follows.IsFollowingInput, follower_id=follower_id, following_id=following_id),
        )
        return result.is_following

    async def get_follow_stats(self, user_id: str) -> FollowStats:
        return await self.query(follows.GET_FOLLOW_STATS, build_input(follows.UserIdInput, user_id=user_id))

    async def get_mutual_follows(
        self, user_id1: str, user_id2: str, limit: int = 20
    ) -> follows.MutualFollowsResult:
        return await self.query(
            follows.GET_MUTUAL_FOLLOWS,
            build_input(follows.GetMutualFollowsInput, user_id1=user_id1, user_id2=user_id2, limit=limit),
        )

    async def get_suggested_follows(self, limit: int = 10) -> follows.SuggestedFollowsResult:
        return await self.query(follows.GET_SUGGESTED_FOLLOWS, build_input(follows.GetSuggestedFollowsInput, limit=limit))

    # -- comments ---------------------------------------------------------

    async def get_comments(
        self, post_id: str, limit: int = 20, cursor: str | None = None
    ) -> comments.CommentsPage:
        return await self.query(
            comments.GET_COMMENTS, build_input(comments.GetCommentsInput, post_id=post_id, limit=limit, cursor=cursor)
        )

    async def add_comment(self, post_id: str, content: str) -> Comment:
        return await self.mutate(
            comments.ADD_COMMENT, build_input(comments.AddCommentInput, post_id=post_id, content=content)
        )

    async def delete_comment(self, comment_id: str) -> SuccessResponse:
        return await self.mutate(comments.DELETE_COMMENT, build_input(comments.CommentIdInput, comment_id=comment_id))

    async def get_comments_by_user(
        self, user_id: str, limit: int = 20, cursor: str | None = None
    ) -> comments.CommentsPage:
        return await self.query(
            comments.GET_COMMENTS_BY_USER,
            build_input(comments.GetCommentsByUserInput, user_id=user_id, limit=limit, cursor=cursor),
        )

    # -- messages ---------------------------------------------------------

    async def get_chatrooms(self, limit: int = 20, cursor: str | None = None) -> messages.ChatroomsPage:
        return await self.query(messages.GET_CHATROOMS, build_input(messages.GetChatroomsInput, limit=limit, cursor=cursor))

    async def create_direct_chatroom(self, participant_id: str) -> Chatroom:
        return await self.mutate(
            messages.CREATE_CHATROOM,
            build_input(messages.CreateChatroomInput, type=ChatroomType.DIRECT, participant_id=participant_id),
        )

    async def create_group_chatroom(
        self,
        participant_ids: list[str],
        name: str,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Chatroom:
        return await self.mutate(
            messages.CREATE_CHATROOM,
            build_input(
                messages.CreateChatroomInput,
                type=ChatroomType.GROUP,
                participant_ids=participant_ids,
                name=name,
                description=description,
                image_url=image_url,
            ),
        )

    async def send_message(
        self,
        chatroom_id: str,
        content: str,
        message_type: MessageType = MessageType.TEXT,
        media_url: str | None = None,
        shared_content_id: str | None = None,
        link_preview: messages.LinkPreviewInput | None = None,
    ) -> Message:
        return await self.mutate(
            messages.SEND_MESSAGE,
            build_input(
                messages.SendMessageInput,
                chatroom_id=chatroom_id,
                content=content,
                message_type=message_type,
                media_url=media_url,
                shared_content_id=shared_content_id,
                link_preview=link_preview,
            ),
        )

    async def get_messages(
        self, chatroom_id: str, limit: int = 50, cursor: str | None = None
    ) -> messages.MessagesPage:
        return await self.query(
            messages.GET_MESSAGES,
            build_input(messages.GetMessagesInput, chatroom_id=chatroom_id, limit=limit, cursor=cursor),
        )

    async def mark_messages_as_read(
        self, chatroom_id: str, message_ids: list[str] | None = None
    ) -> SuccessResponse:
        return await self.mutate(
            messages.MARK_MESSAGES_AS_READ,
            build_input(messages.MarkMessagesAsReadInput, chatroom_id=chatroom_id, message_ids=message_ids),
        )

    async def get_messages_unread_count(self) -> int:
        result = await self.query(messages.GET_UNREAD_COUNT)
        return result.unread_count

    async def leave_chatroom(self, chatroom_id: str) -> SuccessResponse:
        return await self.mutate(messages.LEAVE_CHATROOM, build_input(messages.ChatroomIdInput, chatroom_id=chatroom_id))

    async def add_participants(
        self, chatroom_id: str, user_ids: list[str]
    ) -> messages.AddParticipantsResult:
        return await self.mutate(
            messages.ADD_PARTICIPANTS,
            build_input(messages.AddParticipantsInput, chatroom_id=chatroom_id, user_ids=user_ids),
        )

    async def remove_participant(self, chatroom_id: str, user_id: str) -> SuccessResponse:
        return await self.mutate(
            messages.REMOVE_PARTICIPANT,
            build_input(messages.ChatroomMemberInput, chatroom_id=chatroom_id, user_id=user_id),
        )

    async def make_admin(self, chatroom_id: str, user_id: str) -> SuccessResponse:
        return await self.mutate(
            messages.MAKE_ADMIN, build_input(messages.ChatroomMemberInput, chatroom_id=chatroom_id, user_id=user_id)
        )

    async def update_group_settings(
        self,
        chatroom_id: str,
        name: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Chatroom:
        return await self.mutate(
            messages.UPDATE_GROUP_SETTINGS,
            build_input(
                messages.UpdateGroupSettingsInput,
                chatroom_id=chatroom_id, name=name, description=description, image_url=image_url
            ),
        )

    async def get_shared_media(
        self,
        chatroom_id: str,
        message_type: MessageType | None = None,
        limit: int = 20,
        cursor: str | None = None,
    ) -> messages.MessagesPage:
        return await self.query(
            messages.GET_SHARED_MEDIA,
            build_input(
                messages.GetSharedMediaInput,
                chatroom_id=chatroom_id, message_type=message_type, limit=limit, cursor=cursor
            ),
        )

    # -- notifications ----------------------------------------------------

    async def get_notifications(
        self,
        limit: int = 20,
        cursor: str | None = None,
        type: NotificationType | None = None,
        types: list[NotificationType] | None = None,
        unread_only: bool = False,
    ) -> notifications.NotificationsPage:
        return await self.query(
            notifications.GET_NOTIFICATIONS,
            build_input(
                notifications.GetNotificationsInput,
                limit=limit, cursor=cursor, type=type, types=types, unread_only=unread_only
            ),
        )

    async def mark_notifications_as_read(
        self, notification_ids: list[str] | None = None
    ) -> SuccessResponse:
        return await self.mutate(
            notifications.MARK_AS_READ,
            build_input(notifications.MarkAsReadInput, notification_ids=notification_ids),
        )

    async def mark_all_notifications_as_read(self) -> SuccessResponse:
        return await self.mutate(notifications.MARK_ALL_AS_READ)

    async def get_notifications_unread_count(self) -> int:
        result = await self.query(notifications.GET_UNREAD_COUNT)
        return result.count

    async def delete_notifications(self, notification_ids: list[str]) -> SuccessResponse:
        return await self.mutate(
            notifications.DELETE_NOTIFICATIONS,
            build_input(notifications.DeleteNotificationsInput, notification_ids=notification_ids),
        )

    async def clear_all_notifications(self) -> SuccessResponse:
        return await self.mutate(notifications.CLEAR_ALL)

    async def get_notification_settings(self) -> NotificationSettings:
        return await self.query(notifications.GET_SETTINGS)

    async def update_notification_settings(self, **settings: bool) -> notifications.UpdateSettingsResult:
        return await self.mutate(
            notifications.UPDATE_SETTINGS, build_input(notifications.UpdateSettingsInput, **settings)
        )

    async def get_notifications_by_type(self, days: int = 7) -> notifications.NotificationsByType:
        return await self.query(
            notifications.GET_NOTIFICATIONS_BY_TYPE, build_input(notifications.GetNotificationsByTypeInput, days=days)
        )

    # -- lists ------------------------------------------------------------

    async def get_user_lists(self, user_id: str) -> lists.UserLists:
        return await self.query(lists.GET_USER_LISTS, build_input(lists.GetUserListsInput, user_id=user_id))

    async def get_list_by_id(self, list_id: str) -> SavedList | None:
        return await self.query(lists.GET_LIST_BY_ID, build_input(lists.ListIdInput, list_id=list_id))

    async def create_list(
        self,
        name: str,
        description: str | None = None,
        is_public: bool = True,
        cover_image_url: str | None = None,
    ) -> SavedList:
        return await self.mutate(
            lists.CREATE_LIST,
            build_input(
                lists.CreateListInput,
                name=name, description=description, is_public=is_public, cover_image_url=cover_image_url
            ),
        )

    async def update_list(self, list_id: str, **fields: Any) -> SavedList:
        return await self.mutate(lists.UPDATE_LIST, build_input(lists.UpdateListInput, list_id=list_id, **fields))

    async def delete_list(self, list_id: str) -> SuccessResponse:
        return await self.mutate(lists.DELETE_LIST, build_input(lists.ListIdInput, list_id=list_id))

    async def add_to_list(self, list_id: str, place_id: str, notes: str | None = None) -> ListItem:
        return await self.mutate(
            lists.ADD_TO_LIST, build_input(lists.AddToListInput, list_id=list_id, place_id=place_id, notes=notes)
        )

    async def remove_from_list(self, list_id: str, place_id: str) -> SuccessResponse:
        return await self.mutate(
            lists.REMOVE_FROM_LIST, build_input(lists.RemoveFromListInput, list_id=list_id, place_id=place_id)
        )

    # -- places -----------------------------------------------------------

    async def search_places(self, query: str, limit: int = 10) -> list[Place]:
        return await self.query(places.SEARCH_PLACES, build_input(places.SearchPlacesInput, query=query, limit=limit))
