"""
typertrack.serialization  ──  what every generated call runs before it
reaches the host SDK.

* `attach_context` stamps generator metadata onto an Options object.
* `serialize_list` / `to_plain` unwrap nested lists and property objects.
"""

from __future__ import annotations

import logging
from functools import singledispatch
from typing import Any, List, Optional, Sequence, TypeVar

from .context import GeneratorContext
from .core.serializable import SerializableProperties
from .options import Options, SupportsCustomContext

logger = logging.getLogger(__name__)

T_Options = TypeVar("T_Options", bound=SupportsCustomContext)
T_Seq = TypeVar("T_Seq", List[Any], tuple)


def attach_context(
    context: GeneratorContext, options: Optional[T_Options] = None
) -> T_Options | Options:
    """Put the generator metadata under `context.context_key` and return `options`.

    A fresh `Options` is created when none is passed. Any earlier value under
    the same key is replaced; other custom contexts are left alone.
    """
    if options is None:
        options = Options()
    options.put_custom_context(context.context_key, context.as_mapping())
    logger.debug("attached %s context to %s", context.context_key, type(options).__name__)
    return options


# ------------------------------------------------------------------ #
# one handler per variant: scalar, nested sequence, property object
# ------------------------------------------------------------------ #
@singledispatch
def to_plain(value: Any) -> Any:
    """Scalars (and anything unrecognised) pass through untouched."""
    return value


@to_plain.register
def _(value: SerializableProperties) -> Any:
    return value.to_properties()


@to_plain.register(list)
@to_plain.register(tuple)
def _(value: Sequence[Any]) -> Any:
    return serialize_list(value)


def serialize_list(props: Optional[T_Seq]) -> Optional[T_Seq]:
    """Return a new list (or tuple) with every element made plain.

    Nested lists are handled recursively and keep their shape; `None` comes
    back as `None`. There is no cycle detection: a list that contains itself
    ends in `RecursionError`.
    """
    if props is None:
        return props

    items = [to_plain(item) for item in props]
    return tuple(items) if isinstance(props, tuple) else items
