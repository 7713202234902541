"""comments router."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from palytt_client.procedures.base import mutation, query
from palytt_client.procedures.models import Comment, CursorPage, SuccessResponse, WireInput


class GetCommentsInput(WireInput):
    post_id: str
    limit: int = 20
    cursor: str | None = None


class CommentsPage(CursorPage):
    items_field: ClassVar[str] = "comments"

    comments: list[Comment] = Field(default_factory=list)


class AddCommentInput(WireInput):
    post_id: str
    content: str


class CommentIdInput(WireInput):
    comment_id: str


class GetCommentsByUserInput(WireInput):
    user_id: str
    limit: int = 20
    cursor: str | None = None


GET_COMMENTS = query("comments.getComments", GetCommentsInput, CommentsPage)
ADD_COMMENT = mutation("comments.addComment", AddCommentInput, Comment, protected=True)
DELETE_COMMENT = mutation("comments.deleteComment", CommentIdInput, SuccessResponse, protected=True)
GET_COMMENTS_BY_USER = query("comments.getCommentsByUser", GetCommentsByUserInput, CommentsPage)

PROCEDURES = [GET_COMMENTS, ADD_COMMENT, DELETE_COMMENT, GET_COMMENTS_BY_USER]
