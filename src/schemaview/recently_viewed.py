from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from schemaview.core import DEFAULT_RECENTLY_VIEWED_LIMIT, json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecentlyViewedLink:
    title: str
    location: str

    __slots__ = ("title", "location")


class RecentlyViewedStore(ABC):
    """Keyed store of documents the user has looked at, most recent first."""

    @abstractmethod
    def add(self, title: str, location: str) -> None: ...

    @abstractmethod
    def links(self) -> list[RecentlyViewedLink]: ...


def _push(links: list[RecentlyViewedLink], link: RecentlyViewedLink, limit: int) -> list[RecentlyViewedLink]:
    return [link, *(existing for existing in links if existing.location != link.location)][:limit]


class InMemoryRecentlyViewed(RecentlyViewedStore):
    def __init__(self, limit: int = DEFAULT_RECENTLY_VIEWED_LIMIT) -> None:
        self.limit = limit
        self._links: list[RecentlyViewedLink] = []
        self._lock = threading.Lock()

    def add(self, title: str, location: str) -> None:
        with self._lock:
            self._links = _push(self._links, RecentlyViewedLink(title=title, location=location), self.limit)

    def links(self) -> list[RecentlyViewedLink]:
        with self._lock:
            return list(self._links)


class FileRecentlyViewed(RecentlyViewedStore):
    """Persist recently viewed links as a JSON array in a file."""

    def __init__(self, path: str | Path, limit: int = DEFAULT_RECENTLY_VIEWED_LIMIT) -> None:
        self.path = Path(path).expanduser()
        self.limit = limit
        self._lock = threading.Lock()

    def links(self) -> list[RecentlyViewedLink]:
        try:
            data = json.loads(self.path.read_bytes())
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as exc:
            logger.debug("Ignoring unreadable recently viewed file %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            return []
        return [
            RecentlyViewedLink(title=entry["title"], location=entry["location"])
            for entry in data
            if isinstance(entry, dict) and isinstance(entry.get("title"), str) and isinstance(entry.get("location"), str)
        ][: self.limit]

    def add(self, title: str, location: str) -> None:
        with self._lock:
            links = _push(self.links(), RecentlyViewedLink(title=title, location=location), self.limit)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = [{"title": link.title, "location": link.location} for link in links]
            self.path.write_text(json.dumps(payload), encoding="utf-8")
