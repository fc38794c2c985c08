"""
typertrack.client  ──  A thin typed façade over a host analytics SDK.

Usage pattern in wrapper code
-----------------------------
    from typertrack import GeneratorContext, TypedAnalytics, on

    @on.track("Order Completed")
    class OrderCompleted(SerializableProperties):
        order_id: str | None = Field(None, alias="orderId")

    client = TypedAnalytics(context, analytics=host_sdk)
    client.order_completed(
        OrderCompleted.Builder().order_id("o-1").build(), user_id="u-1"
    )
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from .context import GeneratorContext
from .core.properties import PropertyBag
from .core.serializable import SerializableProperties
from .errors import MissingAnalyticsError, ViolationError
from .events import EventDefinition, EventRegistry, EventType, default_registry
from .serialization import attach_context, to_plain

UNKNOWN_CALL_EVENT = "Unknown Analytics Call Fired"
UNKNOWN_CALL_USER_ID = "ruddertyper"

ViolationHandler = Callable[[Dict[str, Any], List[Any]], None]

_MISSING_ANALYTICS = """You must set an analytics instance before firing calls:

>	from typertrack import TypedAnalytics
>
>	client = TypedAnalytics(context, analytics=host_analytics)
>	# or, later on
>	client.set_options(analytics=host_analytics)

The instance needs track/screen/page/identify/group methods that accept
keyword arguments."""


def _in_test_env() -> bool:
    return bool(os.environ.get("PYTEST_CURRENT_TEST")) or os.environ.get("TYPERTRACK_ENV") == "test"


def plain_properties(properties: Any) -> Dict[str, Any]:
    """`SerializableProperties`, mapping or `None` ➜ plain `dict`."""
    if properties is None:
        return {}
    if isinstance(properties, SerializableProperties):
        return properties.to_properties().to_dict()
    if isinstance(properties, Mapping):
        return PropertyBag({k: to_plain(v) for k, v in properties.items()}).to_dict()
    raise TypeError(f"cannot send {type(properties).__name__} as event properties")


class TypedAnalytics:
    """
    Forwards typed events to a host SDK, stamping generator metadata on each
    call. Registered events are exposed as methods named after the event
    (`client.order_completed(...)`); any other public attribute is treated
    as an unknown call and reported as such.
    """

    def __init__(
        self,
        context: GeneratorContext,
        analytics: Any = None,
        registry: Optional[EventRegistry] = None,
        on_violation: Optional[ViolationHandler] = None,
        validate: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.context = context
        self.registry = registry if registry is not None else default_registry()
        self.validate = validate
        self.logger = logger or logging.getLogger(__name__)
        self._analytics = analytics
        self._on_violation = on_violation or self._default_violation_handler

    # ---------- runtime configuration ----------
    def set_options(
        self,
        analytics: Any = None,
        on_violation: Optional[ViolationHandler] = None,
    ) -> None:
        """Upsert the analytics instance and/or violation handler."""
        if analytics is not None:
            self._analytics = analytics
        if on_violation is not None:
            self._on_violation = on_violation

    @property
    def analytics(self) -> Any:
        if self._analytics is None:
            raise MissingAnalyticsError(_MISSING_ANALYTICS)
        return self._analytics

    # ---------- host calls ----------
    def track(self, event: str, properties: Any = None, options: Any = None, **message: Any) -> Any:
        return self._send(EventType.TRACK, properties, options, event=event, **message)

    def screen(self, name: str = "", properties: Any = None, options: Any = None, **message: Any) -> Any:
        return self._send(EventType.SCREEN, properties, options, name=name, **message)

    def page(self, name: str = "", properties: Any = None, options: Any = None, **message: Any) -> Any:
        return self._send(EventType.PAGE, properties, options, name=name, **message)

    def identify(self, user_id: Optional[str] = None, traits: Any = None, options: Any = None, **message: Any) -> Any:
        return self._send(EventType.IDENTIFY, traits, options, user_id=user_id, **message)

    def group(self, group_id: str = "", traits: Any = None, options: Any = None, **message: Any) -> Any:
        return self._send(EventType.GROUP, traits, options, group_id=group_id, **message)

    def _send(self, event_type: EventType, properties: Any, options: Any, **message: Any) -> Any:
        analytics = self.analytics
        payload = plain_properties(properties)
        bag_key = "traits" if event_type in (EventType.IDENTIFY, EventType.GROUP) else "properties"
        message[bag_key] = payload

        if self.validate and isinstance(properties, SerializableProperties):
            self._check(type(properties), {"type": event_type.value, **message})

        message["options"] = attach_context(self.context, options)
        self.logger.debug("%s %s", event_type.value, message.get("event") or message.get("name") or "")
        return getattr(analytics, event_type.value)(**message)

    # ---------- registered events ----------
    def dispatch(self, definition: EventDefinition, properties: Any = None, options: Any = None, **message: Any) -> Any:
        """Fire `definition` through the host call that matches its type."""
        if definition.event_type is EventType.TRACK:
            return self.track(definition.name, properties, options, **message)
        if definition.event_type is EventType.SCREEN:
            return self.screen(definition.name, properties, options, **message)
        if definition.event_type is EventType.PAGE:
            return self.page(definition.name, properties, options, **message)
        if definition.event_type is EventType.IDENTIFY:
            return self.identify(traits=properties, options=options, **message)
        return self.group(traits=properties, options=options, **message)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        registry = self.__dict__.get("registry")
        if registry is not None and name in registry:
            definition = registry.get(name)

            def fire(properties: Any = None, options: Any = None, **message: Any) -> Any:
                return self.dispatch(definition, properties, options, **message)

            fire.__name__ = name
            fire.__doc__ = definition.description
            return fire

        def unknown(*_args: Any, **_kwargs: Any) -> Any:
            self.logger.warning("Unknown analytics call %r fired", name)
            return self.track(
                UNKNOWN_CALL_EVENT,
                {"method": [name]},
                user_id=UNKNOWN_CALL_USER_ID,
            )

        unknown.__name__ = name
        return unknown

    # ---------- violations ----------
    def _check(self, properties_class: type, message: Dict[str, Any]) -> None:
        bag_key = "traits" if "traits" in message else "properties"
        try:
            properties_class.model_validate(message[bag_key])
        except PydanticValidationError as exc:
            self._on_violation(message, exc.errors())

    def _default_violation_handler(self, message: Dict[str, Any], violations: List[Any]) -> None:
        summary = f"{message.get('type')} {message.get('event') or message.get('name') or ''}".strip()
        if _in_test_env():
            raise ViolationError(f"{summary} does not match its tracking plan", violations)
        self.logger.error("%s does not match its tracking plan: %s", summary, violations)
