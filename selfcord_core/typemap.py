"""Type-keyed shared state for event handlers."""

from __future__ import annotations

from typing import Any, ClassVar


class TypeMapKey:
    """Marker base class: subclasses act as keys in a :class:`TypeMap`.

    A subclass may set ``value_type`` to the type its values must have.
    """

    value_type: ClassVar[type | tuple[type, ...] | None] = None


def _check_key(key: Any) -> type[TypeMapKey]:
    if not (isinstance(key, type) and issubclass(key, TypeMapKey)):
        raise TypeError(f"{key!r} is not a TypeMapKey subclass")
    return key


class TypeMap:
    """A map from :class:`TypeMapKey` subclasses to their values."""

    def __init__(self) -> None:
        self._items: dict[type[TypeMapKey], Any] = {}

    def insert(self, key: type[TypeMapKey], value: Any) -> None:
        """Store ``value`` under ``key``, replacing any existing value."""
        key = _check_key(key)
        if key.value_type is not None and not isinstance(value, key.value_type):
            raise TypeError(
                f"value for {key.__name__} must be {key.value_type!r}, "
                f"got {type(value).__name__}"
            )
        self._items[key] = value

    def get(self, key: type[TypeMapKey], default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if unset."""
        return self._items.get(_check_key(key), default)

    def get_mut(self, key: type[TypeMapKey]) -> Any:
        """Return the stored object for ``key`` for in-place changes, or None."""
        return self._items.get(_check_key(key))

    def remove(self, key: type[TypeMapKey]) -> Any:
        """Remove and return the value for ``key``, or None if unset."""
        return self._items.pop(_check_key(key), None)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)