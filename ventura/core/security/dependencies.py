from __future__ import annotations

from fastapi import HTTPException, Request, status

from ventura.core.middleware.context import set_actor
from ventura.core.security.auth import Actor, actor_from_request
from ventura.shared.exceptions import NotAuthorized


def get_actor(request: Request) -> Actor:
    try:
        actor = actor_from_request(request)
    except NotAuthorized as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e) or "Unauthorized")

    set_actor(actor.actor_id, actor.organization_id)
    return actor
