"""Update specifications (``$set`` and ``$inc``)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

SET_OPERATOR = "$set"
INC_OPERATOR = "$inc"


@dataclass(frozen=True)
class UpdateSpec:
    """Field assignments and numeric increments to apply to a document.

    ``None`` means the operator was not present in the update; an empty
    dict means it was present with no fields.
    """

    set_fields: dict[str, Any] | None = None
    inc_fields: dict[str, Any] | None = None

    @property
    def has_set(self) -> bool:
        return self.set_fields is not None

    @property
    def has_inc(self) -> bool:
        return self.inc_fields is not None


def parse_update(spec: Mapping[str, Any] | UpdateSpec) -> UpdateSpec:
    """Build an :class:`UpdateSpec` from ``{"$set": {...}, "$inc": {...}}``.

    Unrecognized operators and non-mapping operator arguments are ignored.

    Raises:
        TypeError: If spec is not a mapping or UpdateSpec.
    """
    if isinstance(spec, UpdateSpec):
        return spec
    if not isinstance(spec, Mapping):
        raise TypeError(f"update must be a mapping, got {type(spec).__name__}")

    set_arg = spec.get(SET_OPERATOR)
    inc_arg = spec.get(INC_OPERATOR)

    return UpdateSpec(
        set_fields=dict(set_arg) if isinstance(set_arg, Mapping) else None,
        inc_fields=dict(inc_arg) if isinstance(inc_arg, Mapping) else None,
    )
