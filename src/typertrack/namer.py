"""
Turns tracking-plan names ("Sample event 1", "Order Completed") into
Python identifiers that are unique within their scope.
"""

from __future__ import annotations

import keyword
import re
from collections import defaultdict
from typing import Dict, Iterable, Optional, Set

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")
_INVALID_RE = re.compile(r"[^a-zA-Z0-9_]")


def _words(parts: Iterable[str]) -> list[str]:
    return _WORD_RE.findall(" ".join(p for p in parts if p))


def snake(*parts: str) -> str:
    """'Order Completed' ➜ 'order_completed'; 'orderID' ➜ 'order_id'."""
    return "_".join(w.lower() for w in _words(parts))


def pascal(*parts: str) -> str:
    """'order completed properties' ➜ 'OrderCompletedProperties'."""
    return "".join(w[:1].upper() + w[1:].lower() for w in _words(parts))


class Namer:
    """Hands out identifiers, resolving collisions per scope.

    Asking again with an id that was already registered returns the same
    name; a different id that wants a taken name gets `_1`, `_2`, ...
    """

    reserved_keywords: Set[str] = set(keyword.kwlist)

    def __init__(self) -> None:
        self._generated: Dict[str, Set[str]] = defaultdict(set)
        self._by_id: Dict[str, Dict[str, str]] = defaultdict(dict)

    def sanitize(self, name: str) -> str:
        sanitized = _INVALID_RE.sub("_", name) or "_"
        if sanitized[0].isdigit():
            sanitized = f"_{sanitized}"
        if sanitized in self.reserved_keywords:
            sanitized = f"_{sanitized}"
        return sanitized

    def get_name(self, id_: str, scope: str = "default") -> Optional[str]:
        return self._by_id.get(scope, {}).get(id_)

    def register_name(self, id_: str, name: str, scope: str) -> str:
        existing = self.get_name(id_, scope)
        if existing:
            return existing

        base = self.sanitize(name)
        final = base
        counter = 1
        while final in self._generated[scope]:
            final = f"{base}_{counter}"
            counter += 1

        self._generated[scope].add(final)
        self._by_id[scope][id_] = final
        return final

    # ------------------------------------------------------------------ #
    # per-kind helpers
    # ------------------------------------------------------------------ #
    def create_class_name(self, id_: str, parts: Iterable[str]) -> str:
        return self.register_name(id_, pascal(*parts), "classes")

    def create_function_name(self, id_: str, parts: Iterable[str]) -> str:
        return self.register_name(id_, snake(*parts), "functions")

    def create_property_name(self, id_: str, name: str, class_name: str) -> str:
        return self.register_name(id_, snake(name), f"properties/{class_name}")

    def create_enum_member_name(self, id_: str, name: str, enum_name: str) -> str:
        member = re.sub(r"[^A-Z0-9]+", "_", name.upper()).strip("_")
        return self.register_name(id_, member, f"enums/{enum_name}")
