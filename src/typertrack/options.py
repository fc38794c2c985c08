"""
Host SDK collaborators.

The host analytics SDK owns delivery; typertrack only relies on the two
methods described by the protocols below. `Options` is the default used
when a caller passes no options object of their own.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Protocol, runtime_checkable


@runtime_checkable
class SupportsCustomContext(Protocol):
    def put_custom_context(self, name: str, context: Mapping[str, Any]) -> Any: ...


@runtime_checkable
class SupportsPutValue(Protocol):
    def put_value(self, key: str, value: Any) -> Any: ...


class Options:
    """Per-call options: custom contexts, integrations and external ids."""

    def __init__(self) -> None:
        self._custom_contexts: Dict[str, Dict[str, Any]] = {}
        self._integrations: Dict[str, bool] = {}
        self._external_ids: Dict[str, str] = {}

    def put_custom_context(self, name: str, context: Mapping[str, Any]) -> "Options":
        self._custom_contexts[name] = dict(context)
        return self

    def put_integration(self, name: str, enabled: bool) -> "Options":
        self._integrations[name] = enabled
        return self

    def put_external_id(self, type_: str, id_: str) -> "Options":
        self._external_ids[type_] = id_
        return self

    @property
    def custom_contexts(self) -> Mapping[str, Dict[str, Any]]:
        return MappingProxyType(self._custom_contexts)

    @property
    def integrations(self) -> Mapping[str, bool]:
        return MappingProxyType(self._integrations)

    @property
    def external_ids(self) -> Mapping[str, str]:
        return MappingProxyType(self._external_ids)

    def to_dict(self) -> Dict[str, Any]:
        """Plain form for hosts that take a `context`/`integrations` dict."""
        out: Dict[str, Any] = {}
        if self._custom_contexts:
            out["context"] = {k: dict(v) for k, v in self._custom_contexts.items()}
        if self._integrations:
            out["integrations"] = dict(self._integrations)
        if self._external_ids:
            out["external_ids"] = dict(self._external_ids)
        return out

    def __repr__(self) -> str:
        return f"Options({self.to_dict()!r})"
