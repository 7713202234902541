"""places router."""

from __future__ import annotations

from palytt_client.procedures.base import query
from palytt_client.procedures.models import Place, WireInput


class SearchPlacesInput(WireInput):
    query: str
    limit: int = 10


SEARCH_PLACES = query("places.searchPlaces", SearchPlacesInput, list[Place])

PROCEDURES = [SEARCH_PLACES]
