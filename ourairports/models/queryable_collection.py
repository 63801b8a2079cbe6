"""
Queryable collection classes for fluent, composable queries.

A lightweight wrapper over a list that supports chaining filters on
in-memory records.
"""

from typing import TypeVar, Generic, Callable, List, Dict, Optional, Any, Iterable

T = TypeVar('T')


class QueryableCollection(Generic[T]):
    """
    A chainable collection for filtering and querying in-memory data.

    Every filtering method returns a new collection; the wrapped list is
    never modified.

    Examples:
        collection.filter(lambda a: a.elevation_ft and a.elevation_ft > 5000).all()
        collection.where(iso_country='CN').first()
        collection.order_by(lambda a: a.name).take(10).all()
    """

    def __init__(self, items: Iterable[T]):
        self._items: List[T] = items if isinstance(items, list) else list(items)

    def filter(self, predicate: Callable[[T], bool]) -> 'QueryableCollection[T]':
        """
        Filter items using a predicate function.

        Args:
            predicate: Function that takes an item and returns True to include it

        Returns:
            New collection of the same class with the matching items
        """
        return self.__class__([item for item in self._items if predicate(item)])

    def where(self, **kwargs) -> 'QueryableCollection[T]':
        """
        Filter items by exact attribute values (AND logic).

        Examples:
            airports.where(ident='ZBAA')
        """
        def matches(item: T) -> bool:
            return all(
                getattr(item, key, None) == value
                for key, value in kwargs.items()
            )
        return self.filter(matches)

    def first(self) -> Optional[T]:
        """Return the first item or None if the collection is empty."""
        return self._items[0] if self._items else None

    def all(self) -> List[T]:
        """Return all items as a list."""
        return self._items

    def count(self) -> int:
        return len(self._items)

    def exists(self) -> bool:
        return len(self._items) > 0

    def group_by(self, key_func: Callable[[T], str]) -> Dict[str, List[T]]:
        """
        Group items by a key function.

        Returns:
            Dictionary mapping keys to lists of items, in first-seen order
        """
        result: Dict[str, List[T]] = {}
        for item in self._items:
            result.setdefault(key_func(item), []).append(item)
        return result

    def order_by(self, key_func: Callable[[T], Any], reverse: bool = False) -> 'QueryableCollection[T]':
        """Sort items by a key function (stable)."""
        return self.__class__(sorted(self._items, key=key_func, reverse=reverse))

    def take(self, n: int) -> 'QueryableCollection[T]':
        return self.__class__(self._items[:n])

    def skip(self, n: int) -> 'QueryableCollection[T]':
        return self.__class__(self._items[n:])

    def map(self, transform: Callable[[T], Any]) -> 'QueryableCollection[Any]':
        """
        Transform each item using a function.

        Examples:
            icao_codes = airports.map(lambda a: a.ident).all()
        """
        return QueryableCollection([transform(item) for item in self._items])

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.__class__(self._items[index])
        return self._items[index]

    def __bool__(self):
        return len(self._items) > 0

    def __repr__(self):
        class_name = self.__class__.__name__
        count = len(self._items)
        if count == 0:
            return f"{class_name}([])"

        preview_items = []
        for item in self._items[:3]:
            if getattr(item, 'ident', None):
                preview_items.append(repr(item.ident))
            elif hasattr(item, 'name'):
                preview_items.append(repr(item.name))
            else:
                preview_items.append(f"<{type(item).__name__}>")
        if count > 3:
            preview_items.append('...')

        return f"{class_name}([{', '.join(preview_items)}], count={count})"
