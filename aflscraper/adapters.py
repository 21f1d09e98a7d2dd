"""
Site adapters: pluggable URL expansion and page parsing.

Adapters are registered against a URL predicate and tried in registration
order. When none matches, TablesAdapter (the built-in AFL Tables logic) is used.
"""
import re
from abc import ABC, abstractmethod
from typing import Callable, Optional, Union

from aflscraper.expand import expand_season_page
from aflscraper.models import Row
from aflscraper.parsers import parse_page

UrlPredicate = Callable[[str], bool]


class Adapter(ABC):
    """Site-specific expansion and parsing strategy."""

    @abstractmethod
    def expand_url(self, season_url: str, fetcher, round_number: Optional[int] = None) -> list[str]:
        """Return absolute match URLs for a season URL."""
        raise NotImplementedError

    @abstractmethod
    def parse_page(self, html: str, url: str) -> list[Row]:
        """Return row records for one page."""
        raise NotImplementedError


class TablesAdapter(Adapter):
    """Built-in handling for AFL Tables season and match pages."""

    def expand_url(self, season_url: str, fetcher, round_number: Optional[int] = None) -> list[str]:
        return expand_season_page(season_url, fetcher, round_number)

    def parse_page(self, html: str, url: str) -> list[Row]:
        return parse_page(html, url)


class AdapterRegistry:
    """Ordered (predicate, adapter) pairs; first match wins."""

    def __init__(self, fallback: Optional[Adapter] = None):
        self._entries: list[tuple[UrlPredicate, Adapter]] = []
        self.fallback = fallback or TablesAdapter()

    def register(self, predicate: Union[UrlPredicate, str], adapter: Adapter) -> None:
        """
        Register an adapter.

        Args:
            predicate: Callable taking a URL, or a regex searched in the URL
            adapter: Strategy used when the predicate matches
        """
        if isinstance(predicate, str):
            pattern = re.compile(predicate)
            predicate = lambda url: pattern.search(url) is not None  # noqa: E731
        self._entries.append((predicate, adapter))

    def find_adapter(self, url: str) -> Optional[Adapter]:
        for predicate, adapter in self._entries:
            if predicate(url):
                return adapter
        return None

    def resolve(self, url: str) -> Adapter:
        """Matching adapter, or the fallback."""
        return self.find_adapter(url) or self.fallback

    def __len__(self) -> int:
        return len(self._entries)


registry = AdapterRegistry()


def find_adapter(url: str) -> Optional[Adapter]:
    """Look up a registered adapter in the default registry."""
    return registry.find_adapter(url)
