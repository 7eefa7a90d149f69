from __future__ import annotations


class ClientError(Exception):
    """Base error for everything the pipeline client surfaces to the user."""


class ApiError(ClientError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class Unauthorized(ApiError):
    """Session missing or expired; the caller should send the user to `redirect_to`."""

    def __init__(self, redirect_to: str, message: str = "Unauthorized") -> None:
        super().__init__(401, message)
        self.redirect_to = redirect_to


class TransitionCancelled(ClientError):
    """The confirmation flow for a stage change was dismissed."""


class ModalBusy(ClientError):
    """Another deal is already waiting on a confirmation flow."""


def user_message(e: ClientError) -> str:
    """Text to show next to whatever triggered the failed action."""
    return e.message if isinstance(e, ApiError) else str(e)
