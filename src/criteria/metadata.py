"""Intent metadata extraction for search descriptor types.

Descriptor types are inspected once: the resulting `FieldIntent` records are cached for the
process lifetime. Entries are only ever added, never replaced or evicted, so a record tuple handed
out once stays valid.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, get_type_hints

from pydantic import BaseModel

from src.criteria.errors import DescriptorAccessError, DescriptorError
from src.criteria.markers import Operation, QueryPath, QueryRange, QueryTerm

logger = logging.getLogger(__name__)

_MARKER_TYPES = (QueryTerm, QueryRange, QueryPath)


class IntentKind(StrEnum):
    """How a field's value participates in the predicate."""

    multi_path_term = "multi_path_term"
    range = "range"
    single_path = "single_path"
    none = "none"


@dataclass(frozen=True)
class FieldIntent:
    """Declared intent of a single descriptor field."""

    name: str
    kind: IntentKind
    paths: tuple[str, ...]
    operation: Operation

    def read(self, descriptor: Any) -> Any:
        """Return the field's current value on `descriptor`."""

        try:
            return getattr(descriptor, self.name)
        except AttributeError as exc:
            raise DescriptorAccessError(self.name) from exc


_FIELD_CACHE: dict[type, tuple[FieldIntent, ...]] = {}
_FIELD_CACHE_LOCK = threading.Lock()


def _intent_from_markers(name: str, markers: list[Any]) -> FieldIntent:
    if len(markers) > 1:
        kinds = ", ".join(type(m).__name__ for m in markers)
        raise DescriptorError(f"field {name!r} declares more than one intent: {kinds}")

    if not markers:
        # Unmarked fields match their own name by equality.
        return FieldIntent(
            name=name,
            kind=IntentKind.single_path,
            paths=(name,),
            operation=Operation.equal,
        )

    marker = markers[0]
    if isinstance(marker, QueryTerm):
        return FieldIntent(
            name=name,
            kind=IntentKind.multi_path_term,
            paths=marker.paths,
            operation=marker.operation,
        )
    if isinstance(marker, QueryRange):
        return FieldIntent(
            name=name,
            kind=IntentKind.range,
            paths=(marker.path,),
            operation=Operation.equal,
        )
    return FieldIntent(
        name=name,
        kind=IntentKind.single_path,
        paths=(marker.path,),
        operation=marker.operation,
    )


def _markers_of(metadata: Any) -> list[Any]:
    return [m for m in metadata if isinstance(m, _MARKER_TYPES)]


def _extract_pydantic(descriptor_type: type[BaseModel]) -> tuple[FieldIntent, ...]:
    return tuple(
        _intent_from_markers(name, _markers_of(info.metadata))
        for name, info in descriptor_type.model_fields.items()
    )


def _extract_dataclass(descriptor_type: type) -> tuple[FieldIntent, ...]:
    try:
        hints = get_type_hints(descriptor_type, include_extras=True)
    except (NameError, TypeError) as exc:
        raise DescriptorError(
            f"cannot read field declarations of {descriptor_type.__qualname__}"
        ) from exc

    intents = []
    for f in dataclasses.fields(descriptor_type):
        metadata = getattr(hints.get(f.name), "__metadata__", ())
        intents.append(_intent_from_markers(f.name, _markers_of(metadata)))
    return tuple(intents)


def _extract_field_intents(descriptor_type: type) -> tuple[FieldIntent, ...]:
    if isinstance(descriptor_type, type) and issubclass(descriptor_type, BaseModel):
        intents = _extract_pydantic(descriptor_type)
    elif isinstance(descriptor_type, type) and dataclasses.is_dataclass(descriptor_type):
        intents = _extract_dataclass(descriptor_type)
    else:
        raise DescriptorError(
            f"unsupported descriptor type {descriptor_type!r}; "
            "expected a pydantic model or a dataclass"
        )

    logger.debug(
        "extracted field intents type=%s fields=%d",
        descriptor_type.__qualname__,
        len(intents),
    )
    return intents


def get_field_intents(descriptor_type: type) -> tuple[FieldIntent, ...]:
    """Return the cached intents of `descriptor_type`, extracting them on first use.

    Concurrent first calls for the same type run the extraction once; every caller receives the
    same tuple.
    """

    cached = _FIELD_CACHE.get(descriptor_type)
    if cached is not None:
        return cached

    with _FIELD_CACHE_LOCK:
        cached = _FIELD_CACHE.get(descriptor_type)
        if cached is None:
            cached = _extract_field_intents(descriptor_type)
            _FIELD_CACHE[descriptor_type] = cached
        return cached
