"""
Ordered request parameters.

Every request builder owns exactly one ParameterList and mutates it through
``set`` and ``list_append``. Setting a key to the empty string is how a
field is removed: the entry keeps its slot but is left out on the wire.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from .constants import LIST_DELIMITER
from .exceptions import BuildError


class ParameterList:
    """Ordered mapping of string keys to string values."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items) if items else {}

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite a value. Overwrites keep the key's original position."""
        self._items[key] = str(value)

    def list_append(self, key: str, item: Any, delimiter: str = LIST_DELIMITER) -> None:
        """
        Append an item to a delimiter-joined list parameter.

        Items already present are skipped, so appending is idempotent.

        Args:
            key: Name of the list parameter
            item: Item to append; its ``str()`` form is stored
            delimiter: Join delimiter (default: ",")

        Raises:
            BuildError: If the item's string form contains the delimiter
        """
        text = str(item)
        if delimiter in text:
            raise BuildError(
                f"List item for '{key}' must not contain the delimiter {delimiter!r}: {text!r}"
            )
        if not text:
            return

        current = [fragment for fragment in self._items.get(key, "").split(delimiter) if fragment]
        if text in current:
            return
        current.append(text)
        self._items[key] = delimiter.join(current)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._items.get(key, default)

    def copy(self) -> "ParameterList":
        """Return an independent copy."""
        return ParameterList(self._items)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._items.items())

    def present_items(self) -> List[Tuple[str, str]]:
        """Items with a non-empty value, in insertion order."""
        return [(key, value) for key, value in self._items.items() if value != ""]

    def as_dict(self) -> Dict[str, str]:
        return dict(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterList):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())

    def __repr__(self) -> str:
        return f"ParameterList({self._items!r})"
