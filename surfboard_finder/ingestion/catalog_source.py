"""
Catalog sources — where the board feed lives and how its bytes decode.

Each source provides:
  resolve() -> str              URL to fetch
  decode(content) -> list[Board] parse the fetched body

Variants:
  JsonUrlSource — JSON array of board objects. GitHub "blob" page URLs are
                  rewritten to raw.githubusercontent.com before fetching, so
                  the URL copied from the browser works as-is.
  CsvUrlSource  — CSV export (e.g. a shared spreadsheet view), parsed by
                  ``catalog_csv.parse_catalog_csv``.

``source_from_config(CatalogConfig)`` selects the configured variant.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from pydantic import ValidationError

from surfboard_finder.ingestion.catalog_csv import parse_catalog_csv
from surfboard_finder.models.board import Board
from surfboard_finder.taxonomy.board_taxonomy import CatalogKind

if TYPE_CHECKING:
    from surfboard_finder.config import CatalogConfig

logger = logging.getLogger(__name__)

_GITHUB_BLOB_RE = re.compile(r"github\.com/.+/blob/")


def normalize_github_raw(url: str) -> str:
    """Rewrite a GitHub blob page URL to its raw-content URL.

    Example::

        normalize_github_raw("https://github.com/acme/boards/blob/main/boards.json")
        # → "https://raw.githubusercontent.com/acme/boards/main/boards.json"

    Any other URL is returned unchanged.
    """
    if not _GITHUB_BLOB_RE.search(url):
        return url
    return url.replace(
        "https://github.com/", "https://raw.githubusercontent.com/", 1
    ).replace("/blob/", "/", 1)


class CatalogSource(ABC):
    """A remote board feed: a URL plus a decoder for its body."""

    kind: ClassVar[CatalogKind]

    def __init__(self, url: str) -> None:
        self.url = url

    @abstractmethod
    def resolve(self) -> str:
        """Return the URL to fetch."""

    @abstractmethod
    def decode(self, content: bytes) -> list[Board]:
        """Decode a fetched body into boards.

        Raises:
            ValueError: If the body is not a usable feed.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r})"


class JsonUrlSource(CatalogSource):
    """JSON array feed; GitHub blob URLs are normalized to raw URLs."""

    kind = CatalogKind.JSON_URL

    def resolve(self) -> str:
        return normalize_github_raw(self.url)

    def decode(self, content: bytes) -> list[Board]:
        payload = json.loads(content)
        if not isinstance(payload, list):
            raise ValueError(
                f"JSON catalog must be an array of boards, got {type(payload).__name__}."
            )

        boards: list[Board] = []
        for i, raw in enumerate(payload):
            try:
                boards.append(Board.model_validate(raw))
            except ValidationError as exc:
                logger.warning("Board #%d: invalid record skipped: %s", i, exc.errors()[0]["msg"])
        return boards


class CsvUrlSource(CatalogSource):
    """CSV export feed."""

    kind = CatalogKind.CSV_URL

    def resolve(self) -> str:
        return self.url

    def decode(self, content: bytes) -> list[Board]:
        text = content.decode("utf-8-sig")
        if not text.strip():
            raise ValueError("CSV catalog is empty.")
        return parse_catalog_csv(text)


_SOURCES: dict[CatalogKind, type[CatalogSource]] = {
    CatalogKind.JSON_URL: JsonUrlSource,
    CatalogKind.CSV_URL:  CsvUrlSource,
}


def source_from_config(config: "CatalogConfig") -> CatalogSource:
    """Build the catalog source selected by ``config.kind``."""
    kind = CatalogKind(config.kind)
    url = config.json_url if kind == CatalogKind.JSON_URL else config.csv_url
    return _SOURCES[kind](url)
