# quotesync Category Index
# Derived category set and category filtering

from collections.abc import Iterable
from typing import Optional

from quotesync.sync.quote import Quote

ALL_CATEGORIES = "all"


class CategoryIndex:
    """
    Derives the distinct category set from a collection.

    Categories are never stored; ``refresh`` recomputes the cached list
    after the collection changes.
    """

    ALL = ALL_CATEGORIES

    def __init__(self, collection: Optional[Iterable[Quote]] = None):
        self._categories: list[str] = [self.ALL]
        if collection is not None:
            self.refresh(collection)

    @property
    def current(self) -> list[str]:
        """Categories as of the last refresh, sentinel first."""
        return list(self._categories)

    def refresh(self, collection: Iterable[Quote]) -> list[str]:
        """Recompute the cached category list."""
        self._categories = self.categories(collection)
        return self.current

    def contains(self, category: str) -> bool:
        """Check if a category (or the sentinel) is currently known."""
        return category in self._categories

    @staticmethod
    def categories(collection: Iterable[Quote]) -> list[str]:
        """
        Get distinct categories in first-seen order, prefixed with "all".

        Args:
            collection: Quotes to scan.

        Returns:
            Ordered list starting with the "all" sentinel.
        """
        seen: dict[str, None] = {}
        for quote in collection:
            seen.setdefault(quote.category, None)
        return [ALL_CATEGORIES, *(c for c in seen if c != ALL_CATEGORIES)]

    @staticmethod
    def filter(collection: Iterable[Quote], selected: Optional[str] = ALL_CATEGORIES) -> list[Quote]:
        """
        Get the quotes in a category.

        Args:
            collection: Quotes to filter (never mutated).
            selected: Category name, or "all"/None for no filter.

        Returns:
            Matching quotes in original relative order.
        """
        if selected is None or selected == ALL_CATEGORIES:
            return list(collection)
        return [q for q in collection if q.category == selected]
