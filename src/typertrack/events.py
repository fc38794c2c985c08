"""
typertrack.events  ──  Tracking-plan event registry and the `on` decorators
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Tuple, Type

from pydantic import BaseModel

from .core.serializable import SerializableProperties
from .errors import UnknownEventError
from .namer import Namer


class EventType(str, Enum):
    TRACK = "track"
    SCREEN = "screen"
    PAGE = "page"
    IDENTIFY = "identify"
    GROUP = "group"


class EventDefinition(BaseModel):
    """One tracking-plan rule: wire name, call type and properties class."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    name: str
    event_type: EventType
    properties_class: Type[SerializableProperties]
    method_name: str
    description: Optional[str] = None


# names TypedAnalytics already uses for itself
RESERVED_METHODS = (
    "track",
    "screen",
    "page",
    "identify",
    "group",
    "dispatch",
    "set_options",
    "analytics",
    "context",
    "registry",
    "validate",
    "logger",
)

# fallback name part for calls that usually carry no event name
_UNNAMED = {
    EventType.SCREEN: "view",
    EventType.PAGE: "view",
    EventType.IDENTIFY: "traits",
    EventType.GROUP: "traits",
}


class EventRegistry:
    """Central registry of the events a typed client exposes"""

    def __init__(self, namer: Optional[Namer] = None):
        self._namer = namer or Namer()
        for reserved in RESERVED_METHODS:
            self._namer.register_name(f"reserved.{reserved}", reserved, "functions")
        # Maps (event type, wire name) -> definition
        self._by_key: Dict[Tuple[EventType, str], EventDefinition] = {}
        # Maps method name -> definition
        self._by_method: Dict[str, EventDefinition] = {}

    def register(
        self,
        name: str,
        properties_class: Type[SerializableProperties],
        event_type: EventType | str = EventType.TRACK,
        description: Optional[str] = None,
    ) -> EventDefinition:
        """Register an event; the same (type, name) pair keeps its first definition."""
        event_type = EventType(event_type)
        key = (event_type, name)
        if key in self._by_key:
            return self._by_key[key]

        # track calls are named after the event alone, the rest get a type prefix
        if event_type is EventType.TRACK:
            parts = [name]
        else:
            parts = [event_type.value, name or _UNNAMED[event_type]]
        method_name = self._namer.create_function_name(f"{event_type.value}.{name}", parts)
        definition = EventDefinition(
            name=name,
            event_type=event_type,
            properties_class=properties_class,
            method_name=method_name,
            description=description or properties_class.__doc__,
        )
        self._by_key[key] = definition
        self._by_method[method_name] = definition
        return definition

    def get(self, method_name: str) -> EventDefinition:
        try:
            return self._by_method[method_name]
        except KeyError:
            raise UnknownEventError(method_name) from None

    def lookup(self, name: str, event_type: EventType | str = EventType.TRACK) -> EventDefinition:
        try:
            return self._by_key[(EventType(event_type), name)]
        except KeyError:
            raise UnknownEventError(name) from None

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._by_method

    def __iter__(self) -> Iterator[EventDefinition]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)


# Global registry instance
_registry = EventRegistry()


def default_registry() -> EventRegistry:
    return _registry


class OnDecorator:
    """Namespace for class decorators that register properties classes"""

    @staticmethod
    def _register(
        event_type: EventType,
        name: str,
        registry: Optional[EventRegistry],
        description: Optional[str],
    ) -> Callable:
        def decorator(cls: Type[SerializableProperties]) -> Type[SerializableProperties]:
            target = registry if registry is not None else _registry
            target.register(name, cls, event_type, description)
            return cls

        return decorator

    @staticmethod
    def track(name: str, *, registry=None, description=None) -> Callable:
        """Decorator registering a track event"""
        return OnDecorator._register(EventType.TRACK, name, registry, description)

    @staticmethod
    def screen(name: str = "", *, registry=None, description=None) -> Callable:
        """Decorator registering a screen call"""
        return OnDecorator._register(EventType.SCREEN, name, registry, description)

    @staticmethod
    def page(name: str = "", *, registry=None, description=None) -> Callable:
        """Decorator registering a page call"""
        return OnDecorator._register(EventType.PAGE, name, registry, description)

    @staticmethod
    def identify(*, registry=None, description=None) -> Callable:
        """Decorator registering the identify traits class"""
        return OnDecorator._register(EventType.IDENTIFY, "", registry, description)

    @staticmethod
    def group(*, registry=None, description=None) -> Callable:
        """Decorator registering the group traits class"""
        return OnDecorator._register(EventType.GROUP, "", registry, description)


# Export the decorator interface
on = OnDecorator()
