"""
Public surface for typertrack.
Importing this module does **not** touch any host analytics SDK; build a
`GeneratorContext` and hand a host instance to `TypedAnalytics`.
"""

from .client import TypedAnalytics
from .context import GeneratorContext
from .core.properties import Properties, PropertyBag
from .core.serializable import Builder, PropertyEnum, SerializableProperties
from .errors import (
    ConfigurationError,
    MissingAnalyticsError,
    TyperTrackError,
    UnknownEventError,
    ViolationError,
)
from .events import EventDefinition, EventRegistry, EventType, on
from .namer import Namer
from .options import Options
from .serialization import attach_context, serialize_list, to_plain

__all__ = [
    "TypedAnalytics",
    "GeneratorContext",
    "Properties",
    "PropertyBag",
    "Builder",
    "PropertyEnum",
    "SerializableProperties",
    "ConfigurationError",
    "MissingAnalyticsError",
    "TyperTrackError",
    "UnknownEventError",
    "ViolationError",
    "EventDefinition",
    "EventRegistry",
    "EventType",
    "on",
    "Namer",
    "Options",
    "attach_context",
    "serialize_list",
    "to_plain",
]
