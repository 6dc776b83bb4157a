"""Read-only item store for the catalog server.

The store is built once by the application factory and handed to the
request handlers through `catalog.server.dependencies.get_item_store`.
It exposes no mutation methods.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import UTC, datetime

from catalog.server.logger import get_logger
from catalog.server.models import Item


logger = get_logger(__name__)

SEED_ITEMS: tuple[tuple[str, str], ...] = (
    ("1", "Item One"),
    ("2", "Item Two"),
    ("3", "Item Three"),
)


class DuplicateItemIdError(ValueError):
    """Raised when a store is built from items sharing an id."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Duplicate item id: {item_id!r}")
        self.item_id = item_id


class ItemStore:
    """Immutable ordered collection of items with lookup by id."""

    def __init__(self, items: Iterable[Item]) -> None:
        self._items: tuple[Item, ...] = tuple(items)
        seen: set[str] = set()
        for item in self._items:
            if item.id in seen:
                raise DuplicateItemIdError(item.id)
            seen.add(item.id)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def list_items(self) -> list[Item]:
        return list(self._items)

    def get_item(self, item_id: str) -> Item | None:
        """Return the first item whose id equals `item_id` exactly, or None."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None


def default_items(now: datetime | None = None) -> list[Item]:
    created_at = now or datetime.now(UTC)
    return [
        Item(id=item_id, name=name, created_at=created_at)
        for item_id, name in SEED_ITEMS
    ]


def create_default_store(now: datetime | None = None) -> ItemStore:
    store = ItemStore(default_items(now))
    logger.debug("Seeded item store with %d items", len(store))
    return store
