from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from ventura.client.models import SearchResponse

log = structlog.get_logger()

SearchFetch = Callable[[str], Awaitable[SearchResponse]]


class LatestOnlySearch:
    """Debounced command-palette search.

    Each keystroke cancels the pending timer and starts a new one. When a
    timer fires the request is tagged with the next sequence number; a
    response is applied only if no newer request has been issued since.
    In-flight requests are never cancelled, their results are just dropped.
    """

    def __init__(
        self,
        fetch: SearchFetch,
        *,
        debounce: float = 0.15,
        on_result: Callable[[SearchResponse], None] | None = None,
    ) -> None:
        self._fetch = fetch
        self.debounce = debounce
        self._on_result = on_result
        self._timer: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()
        self._issued = 0

        self.query = ""
        self.results = SearchResponse()
        self.loading = False
        self.error: str | None = None

    @property
    def issued(self) -> int:
        return self._issued

    def update_query(self, query: str) -> None:
        self.query = query
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = asyncio.create_task(self._debounced(query))

    async def _debounced(self, query: str) -> None:
        await asyncio.sleep(self.debounce)
        self._spawn(query)

    def _spawn(self, query: str) -> asyncio.Task[None]:
        self._issued += 1
        self.loading = True
        task = asyncio.create_task(self._run(self._issued, query))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _run(self, seq: int, query: str) -> None:
        try:
            response = await self._fetch(query)
        except Exception as e:
            if seq == self._issued:
                self.error = str(e)
                self.loading = False
            log.warning("search.failed", seq=seq, query=query, error=str(e))
            return

        if seq != self._issued:
            log.debug("search.stale_result_dropped", seq=seq, latest=self._issued)
            return
        self.results = response
        self.error = None
        self.loading = False
        if self._on_result is not None:
            self._on_result(response)

    async def flush(self) -> None:
        """Wait for the pending timer and every request already issued."""
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
