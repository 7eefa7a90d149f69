from __future__ import annotations

from structlog import contextvars


def clear_context() -> None:
    contextvars.clear_contextvars()


def set_request_id(request_id: str) -> None:
    contextvars.bind_contextvars(request_id=request_id)


def set_actor(actor_id: str, organization_id: int) -> None:
    contextvars.bind_contextvars(actor_id=actor_id, organization_id=organization_id)
