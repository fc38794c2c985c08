"""
Typed property classes – *pure Pydantic* (no host SDK imports).

* Every subclass of `SerializableProperties` declares one field per
  tracking-plan property; the field alias is the wire key.
* At class-creation time a nested `Builder` is attached with one fluent
  setter per field. Setters convert nested objects/lists before storing.
* `Builder.build()` never validates; it snapshots whatever was set.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, PrivateAttr
from pydantic.fields import FieldInfo

from .properties import Properties, PropertyBag

T_Props = TypeVar("T_Props", bound="SerializableProperties")
ModelMeta = BaseModel.__class__

_RESERVED_SETTERS = {"build"}


class PropertyEnum(str, Enum):
    """Base for enumerated property values; members travel as plain strings."""

    def __str__(self) -> str:
        return str(self.value)


# helpers
def wire_key(name: str, info: FieldInfo) -> str:
    """Key the field is stored under in the property bag."""
    return info.serialization_alias or info.alias or name


def _setter(field_name: str, key: str):
    def setter(self: "Builder", value: Any = None) -> "Builder":
        self._put(field_name, key, value)
        return self

    setter.__name__ = field_name
    setter.__qualname__ = f"Builder.{field_name}"
    setter.__doc__ = f"Set ``{key}``. Optional; ``None`` is stored explicitly."
    setter._generated = True
    return setter


class Builder:
    """Accumulates values for one properties class; see `SerializableProperties`."""

    _target: ClassVar[Type["SerializableProperties"]]

    def __init__(self) -> None:
        self._properties = Properties()
        self._values: Dict[str, Any] = {}

    def _put(self, field_name: str, key: str, value: Any) -> None:
        # late import – serialization dispatches on SerializableProperties
        from ..serialization import to_plain

        self._values[field_name] = value
        self._properties.put_value(key, to_plain(value))

    def build(self):
        """Snapshot the current values. No required-field checks are made."""
        return self._target._from_builder(dict(self._values), self._properties.freeze())


# metaclass that attaches the fluent builder
class SerializableMeta(ModelMeta):
    """Attach a `Builder` with one setter per declared field."""

    def __new__(mcls, name: str, bases, ns, **kw):
        cls = super().__new__(mcls, name, bases, ns, **kw)
        if name == "SerializableProperties" and ns.get("__module__") == __name__:
            return cls

        declared = ns.get("Builder")
        if declared is not None:
            if not (isinstance(declared, type) and issubclass(declared, Builder)):
                raise TypeError(f"{name}.Builder must subclass typertrack Builder")
            builder = declared
        else:
            parent = getattr(cls, "Builder", Builder)
            builder = type(
                "Builder",
                (parent,),
                {
                    "__module__": cls.__module__,
                    "__qualname__": f"{cls.__qualname__}.Builder",
                    "__doc__": f"Builder for {name}.",
                },
            )

        for field_name, info in cls.model_fields.items():
            if field_name in _RESERVED_SETTERS:
                raise TypeError(f"{name}: field name {field_name!r} shadows Builder.{field_name}()")
            existing = getattr(builder, field_name, None)
            if existing is not None and not getattr(existing, "_generated", False):
                continue  # hand-written setter wins
            setattr(builder, field_name, _setter(field_name, wire_key(field_name, info)))

        builder._target = cls
        type.__setattr__(cls, "Builder", builder)
        return cls


class SerializableProperties(BaseModel, metaclass=SerializableMeta):
    """A value that can turn itself into a `PropertyBag` for nesting."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True, "populate_by_name": True}

    Builder: ClassVar[Type[Builder]] = Builder
    _properties: Optional[PropertyBag] = PrivateAttr(default=None)

    @classmethod
    def _from_builder(cls: Type[T_Props], values: Dict[str, Any], bag: PropertyBag) -> T_Props:
        data = {name: None for name in cls.model_fields}
        data.update(values)
        obj = cls.model_construct(_fields_set=set(values), **data)
        obj._properties = bag
        return obj

    @classmethod
    def wire_keys(cls) -> Dict[str, str]:
        """Field name ➜ wire key."""
        return {name: wire_key(name, info) for name, info in cls.model_fields.items()}

    def to_properties(self) -> PropertyBag:
        if self._properties is not None:
            return self._properties

        # constructed directly rather than through the builder
        from ..serialization import to_plain

        keys = self.wire_keys()
        props = Properties()
        for name in type(self).model_fields:
            if name in self.model_fields_set:
                props.put_value(keys[name], to_plain(getattr(self, name)))
        return props.freeze()
