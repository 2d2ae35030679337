"""
Catalog loader — fetch, decode, and fall back.

Flow
----
1. ``source.resolve()``    — final URL (GitHub blob URLs become raw URLs).
2. GET with caching disabled (``Cache-Control: no-cache``).
3. ``source.decode(body)`` — JSON array or CSV text → boards.
4. On ANY failure (network error, non-2xx status, decode error) return the
   bundled ``FALLBACK_BOARDS`` and an advisory warning instead of raising.

One attempt per call; no retries. No timeout is imposed unless the caller
passes one (``[catalog] timeout_s`` in config).

``CatalogSession`` owns the single catalog reference for an interactive
session and applies last-request-wins: starting a new load cancels a
still-running one, and results of a superseded load are discarded.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from surfboard_finder.ingestion.catalog_source import CatalogSource
from surfboard_finder.ingestion.fallback import FALLBACK_BOARDS
from surfboard_finder.models.board import Board, UserQuery
from surfboard_finder.recommendations.ranker import RankedCatalog, rank_catalog
from surfboard_finder.taxonomy.board_taxonomy import CatalogKind

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


@dataclass(frozen=True)
class CatalogLoadResult:
    """Outcome of one catalog load.

    Attributes:
        boards:        Loaded boards, or ``FALLBACK_BOARDS`` on failure.
        warning:       Advisory message when the fallback was used, else ``None``.
        source_kind:   Kind of the source that was attempted.
        used_fallback: ``True`` if ``boards`` is the bundled sample set.
    """

    boards:        tuple[Board, ...]
    warning:       Optional[str]
    source_kind:   CatalogKind
    used_fallback: bool = False


def fallback_warning(kind: CatalogKind) -> str:
    return f"Using sample data ({kind} fetch failed)"


async def load_catalog(
    source:  CatalogSource,
    client:  Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> CatalogLoadResult:
    """Fetch and decode the catalog from ``source``; never raises on feed errors.

    Args:
        source:  Catalog source to load.
        client:  Optional shared ``httpx.AsyncClient`` (a private one is
                 created and closed otherwise).
        timeout: Request timeout in seconds; ``None`` disables the timeout.

    Returns:
        CatalogLoadResult. On failure it carries ``FALLBACK_BOARDS`` and a
        non-``None`` warning.
    """
    try:
        url = source.resolve()
        logger.info("Loading %s catalog from %s", source.kind, url)
        if client is None:
            async with httpx.AsyncClient(follow_redirects=True) as own_client:
                content = await _fetch(own_client, url, timeout)
        else:
            content = await _fetch(client, url, timeout)
        boards = source.decode(content)
    except Exception as exc:
        logger.warning("Falling back to local sample: %s", exc)
        return CatalogLoadResult(
            boards=FALLBACK_BOARDS,
            warning=fallback_warning(source.kind),
            source_kind=source.kind,
            used_fallback=True,
        )

    logger.info("Loaded %d boards from %s feed", len(boards), source.kind)
    return CatalogLoadResult(
        boards=tuple(boards),
        warning=None,
        source_kind=source.kind,
    )


def load_catalog_sync(
    source:  CatalogSource,
    timeout: Optional[float] = None,
) -> CatalogLoadResult:
    """Blocking wrapper around :func:`load_catalog` for CLI use."""
    return asyncio.run(load_catalog(source, timeout=timeout))


async def _fetch(client: httpx.AsyncClient, url: str, timeout: Optional[float]) -> bytes:
    resp = await client.get(url, headers=NO_CACHE_HEADERS, timeout=timeout)
    resp.raise_for_status()
    return resp.content


class CatalogSession:
    """Holds the current catalog and at most one in-flight load.

    Usage::

        session = CatalogSession(JsonUrlSource(url))
        await session.load()
        ranked = session.rank(query)
        if session.warning:
            print(session.warning)

    Attributes:
        source:     Catalog source every load uses.
        boards:     Current catalog (empty until the first load completes).
        warning:    Advisory from the last applied load, or ``None``.
        is_loading: ``True`` while a load is in flight.
    """

    def __init__(
        self,
        source:  CatalogSource,
        client:  Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.source = source
        self.boards: tuple[Board, ...] = ()
        self.warning: Optional[str] = None
        self.is_loading = False
        self._client = client
        self._timeout = timeout
        self._inflight: Optional[asyncio.Task] = None
        self._generation = 0

    async def load(self) -> bool:
        """Load the catalog, superseding any load still in flight.

        Returns:
            ``True`` if this load's result was applied, ``False`` if a newer
            load was started before it finished.
        """
        if self._inflight is not None and not self._inflight.done():
            logger.debug("Cancelling superseded catalog load")
            self._inflight.cancel()

        self._generation += 1
        generation = self._generation
        task = asyncio.ensure_future(
            load_catalog(self.source, client=self._client, timeout=self._timeout)
        )
        self._inflight = task
        self.is_loading = True

        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return False
            self.is_loading = False
            self._inflight = None
            raise

        if generation != self._generation:
            return False

        self.boards = result.boards
        self.warning = result.warning
        self.is_loading = False
        self._inflight = None
        return True

    def rank(self, query: UserQuery) -> RankedCatalog:
        """Rank the current catalog for ``query``."""
        return rank_catalog(self.boards, query)
