from __future__ import annotations

import json
from dataclasses import dataclass

from starlette.requests import Request

from ventura.core.config import settings
from ventura.shared.enums import Env
from ventura.shared.exceptions import NotAuthorized


@dataclass(frozen=True)
class Actor:
    actor_id: str
    organization_id: int


def _parse_dev_actor_header(raw: str) -> Actor:
    """
    DEV ONLY: X-DEV-ACTOR header payload as JSON.

    Example:
      {"actor_id": "dev-user", "organization_id": 1}
    """
    try:
        payload = json.loads(raw)
        return Actor(actor_id=str(payload["actor_id"]), organization_id=int(payload["organization_id"]))
    except (ValueError, KeyError, TypeError) as e:
        raise NotAuthorized("Malformed dev actor header") from e


def actor_from_request(request: Request) -> Actor:
    """Resolve the acting user and their organization.

    Only the dev header is wired; session cookies are issued and verified by
    the auth gateway in front of this service.
    """
    if settings.env not in (Env.dev, Env.test):
        raise NotAuthorized("No authentication backend configured")

    raw = request.headers.get(settings.dev_actor_header)
    if not raw:
        raise NotAuthorized("No authentication token provided")
    return _parse_dev_actor_header(raw)
