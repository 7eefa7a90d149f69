from __future__ import annotations


class AppError(Exception):
    """Base error for domain/application exceptions."""


class NotAuthorized(AppError):
    """Raised when the dev actor header is missing or malformed."""


class NotFound(AppError):
    """Raised when an entity is missing or belongs to another organization."""

    def __init__(self, entity: str, entity_id: int | str) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(AppError):
    """Raised for domain rules that schema validation cannot express."""


class Conflict(AppError):
    """Raised when the entity's current state forbids the requested change."""
