"""lists router: user-curated place lists."""

from __future__ import annotations

from pydantic import Field

from palytt_client.procedures.base import mutation, query
from palytt_client.procedures.models import ListItem, SavedList, SuccessResponse, WireInput, WireModel


class GetUserListsInput(WireInput):
    user_id: str


class UserLists(WireModel):
    lists: list[SavedList] = Field(default_factory=list)


class ListIdInput(WireInput):
    list_id: str


class CreateListInput(WireInput):
    name: str
    description: str | None = None
    is_public: bool = True
    cover_image_url: str | None = None


class UpdateListInput(WireInput):
    list_id: str
    name: str | None = None
    description: str | None = None
    is_public: bool | None = None
    cover_image_url: str | None = None


class AddToListInput(WireInput):
    list_id: str
    place_id: str
    notes: str | None = None


class RemoveFromListInput(WireInput):
    list_id: str
    place_id: str


GET_USER_LISTS = query("lists.getUserLists", GetUserListsInput, UserLists)
GET_LIST_BY_ID = query("lists.getListById", ListIdInput, SavedList | None)
CREATE_LIST = mutation("lists.createList", CreateListInput, SavedList, protected=True)
UPDATE_LIST = mutation("lists.updateList", UpdateListInput, SavedList, protected=True)
DELETE_LIST = mutation("lists.deleteList", ListIdInput, SuccessResponse, protected=True)
ADD_TO_LIST = mutation("lists.addToList", AddToListInput, ListItem, protected=True)
REMOVE_FROM_LIST = mutation("lists.removeFromList", RemoveFromListInput, SuccessResponse, protected=True)

PROCEDURES = [
    GET_USER_LISTS,
    GET_LIST_BY_ID,
    CREATE_LIST,
    UPDATE_LIST,
    DELETE_LIST,
    ADD_TO_LIST,
    REMOVE_FROM_LIST,
]
