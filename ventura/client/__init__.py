"""Async client for the deal pipeline: API wrapper, kanban board and modal flows."""

from ventura.client.app import ClientApp, build_client

__all__ = ["ClientApp", "build_client"]
