from __future__ import annotations

from ventura.shared.schemas import ApiModel


class SearchResult(ApiModel):
    id: int = 0
    type: str
    name: str
    description: str
    url: str


class SearchResponse(ApiModel):
    companies: list[SearchResult]
    deals: list[SearchResult]
    pages: list[SearchResult]
