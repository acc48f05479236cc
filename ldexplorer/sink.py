"""Identity-keyed collections the renderer reads from."""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional


class DuplicateIdentityError(KeyError):
    """Raised when an item with the same identity is already stored."""


def _default_key(item: Any) -> Hashable:
    return item.key


class DataSet:
    """
    Ordered collection of records keyed by identity.

    Items are stored by reference; the collection never copies or edits them.
    `add` refuses an identity that is already present, `remove` accepts either
    the item or its key.
    """

    def __init__(self, key: Callable[[Any], Hashable] = _default_key) -> None:
        self._key = key
        self._items: Dict[Hashable, Any] = {}

    def add(self, item: Any) -> Hashable:
        ident = self._key(item)
        if ident in self._items:
            raise DuplicateIdentityError(ident)
        self._items[ident] = item
        return ident

    def identity(self, item: Any) -> Hashable:
        return self._key(item)

    def remove(self, item_or_key: Any) -> Optional[Any]:
        if self._is_key(item_or_key):
            return self._items.pop(item_or_key)
        try:
            ident = self._key(item_or_key)
        except AttributeError:
            return None
        return self._items.pop(ident, None)

    def get(self, ident: Hashable) -> Optional[Any]:
        return self._items.get(ident)

    def get_ids(self) -> List[Hashable]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def _is_key(self, value: Any) -> bool:
        try:
            return value in self._items
        except TypeError:
            return False

    def __contains__(self, item_or_key: Any) -> bool:
        if self._is_key(item_or_key):
            return True
        try:
            return self._key(item_or_key) in self._items
        except AttributeError:
            return False

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)
