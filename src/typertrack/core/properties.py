"""
Key/value bags that carry one event's properties.

* `Properties` is the mutable bag a builder fills in (`put_value`, `add`,
  `remove`, `list` mutate or read it in place).
* `PropertyBag` is the read-only snapshot handed to the host SDK.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator

from pydantic import BaseModel


class PropertyBag(Mapping):
    """Ordered, read-only mapping of wire key ➜ value."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None):
        object.__setattr__(self, "_data", MappingProxyType(dict(data or {})))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: Any):
        raise TypeError("PropertyBag is immutable")

    def __delattr__(self, name: str):
        raise TypeError("PropertyBag is immutable")

    def __setitem__(self, key: str, value: Any):
        raise TypeError("PropertyBag is immutable")

    def __reduce__(self):
        # mappingproxy itself cannot be pickled
        return (PropertyBag, (dict(self._data),))

    def __repr__(self) -> str:
        return f"PropertyBag({dict(self._data)!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested `dict`/`list` copy, safe to hand to a JSON encoder."""
        return {k: _plain(v) for k, v in self._data.items()}


def _plain(value: Any) -> Any:
    if isinstance(value, PropertyBag):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, tuple):
        return tuple(_plain(v) for v in value)
    return value


class Properties(BaseModel):
    """Mutable bag; every key lives in the pydantic extras so any string works."""

    model_config = {"extra": "allow", "frozen": False, "arbitrary_types_allowed": True}

    # ------------------------------------------------------------------ #
    # host SDK contract
    # ------------------------------------------------------------------ #
    def put_value(self, key: str, value: Any) -> "Properties":
        """Set `key`; `None` is kept as an explicit entry."""
        self.__pydantic_extra__[key] = value
        return self

    # ------------------------------------------------------------------ #
    # convenience helpers
    # ------------------------------------------------------------------ #
    def add(self, **kv: Any) -> None:
        """Add arbitrary key/value pairs."""
        for k, v in kv.items():
            self.put_value(k, v)

    def remove(self, key: str) -> None:
        """Remove a key (no error if absent)."""
        self.__pydantic_extra__.pop(key, None)

    def list(self) -> Dict[str, Any]:
        """Return all keys/values."""
        return dict(self.__pydantic_extra__)

    def freeze(self) -> PropertyBag:
        return PropertyBag(self.__pydantic_extra__)

    def __contains__(self, key: str) -> bool:
        return key in self.__pydantic_extra__

    def __len__(self) -> int:
        return len(self.__pydantic_extra__)
