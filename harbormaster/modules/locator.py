"""
Paginated lookup of provider resources.

Providers disagree on how they signal the end of a collection, so each
convention is a small pagination object answering one question: after this
page, is there another one?
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterator, List, Optional

from harbormaster.errors import DecodeError
from harbormaster.modules.http import ProviderClient

logger = logging.getLogger(__name__)

Item = Dict[str, Any]


class Pagination(ABC):
    """How a collection endpoint pages its results."""

    per_page: Optional[int] = None

    def params(self, page: int) -> Dict[str, Any]:
        params = {"page": page}
        if self.per_page:
            params["per_page"] = self.per_page
        return params

    @abstractmethod
    def has_more(self, page: int, body: Dict[str, Any], items: List[Item]) -> bool:
        """True if another page follows this one."""


class ShortPagePagination(Pagination):
    """A page holding fewer items than requested is the last one."""

    def __init__(self, per_page: int = 10):
        self.per_page = per_page

    def has_more(self, page, body, items):
        return len(items) >= self.per_page


class NextLinkPagination(Pagination):
    """More pages exist while the body carries ``links.pages.next``."""

    def has_more(self, page, body, items):
        links = body.get("links") or {}
        return bool((links.get("pages") or {}).get("next"))


class TotalPagesPagination(Pagination):
    """The body reports ``result_info.total_pages``; stop once we reach it."""

    def has_more(self, page, body, items):
        info = body.get("result_info") or {}
        return int(info.get("total_pages") or 0) > page


class ResourceLocator:
    """Scans a collection endpoint page by page."""

    def __init__(self, client: ProviderClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(f"{__name__}.ResourceLocator")

    def items(self, path: str, items_key: str, pagination: Pagination) -> Iterator[Item]:
        """Lazily yield every item of the collection, in page order.

        Requests are only issued as the caller consumes items, so stopping
        early stops the scan. Errors from the client propagate as-is, and a
        page without an ``items_key`` list raises DecodeError.
        """
        page = 1
        while True:
            self.logger.debug(f"Fetching {path} page {page}")
            body = self.client.get(path, params=pagination.params(page))
            items = body.get(items_key)
            if not isinstance(items, list):
                raise DecodeError(f"Expected a '{items_key}' list in {path} page {page}")
            yield from items
            if not pagination.has_more(page, body, items):
                return
            page += 1

    def find(self, path: str, items_key: str, predicate: Callable[[Item], bool],
             pagination: Pagination) -> Optional[Item]:
        """Return the first item matching predicate, or None once pages run out."""
        return find_first(self.items(path, items_key, pagination), predicate)


def find_first(items: Iterator[Item], predicate: Callable[[Item], bool]) -> Optional[Item]:
    for item in items:
        if predicate(item):
            return item
    return None


def name_equals(name: str, key: str = "name") -> Callable[[Item], bool]:
    """Case-insensitive equality on one field of an item."""
    target = name.lower()
    return lambda item: str(item.get(key, "")).lower() == target
