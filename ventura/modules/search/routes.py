from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ventura.core.db.session import get_db
from ventura.core.security.auth import Actor
from ventura.core.security.dependencies import get_actor
from ventura.modules.search import service
from ventura.modules.search.schemas import SearchResponse

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResponse)
def global_search(
    q: str = Query(default="", max_length=200),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> SearchResponse:
    return service.global_search(db, organization_id=actor.organization_id, query=q)
