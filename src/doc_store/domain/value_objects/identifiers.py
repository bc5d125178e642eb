"""Document identity and field value primitives.

Documents are plain ``dict`` objects keyed by field name. These helpers
cover the pieces of the value model that plain dicts do not: the
store-assigned identity, an explicit marker for absent fields, and the
strict equality used by filters and joins.
"""

from __future__ import annotations

import os
import time
import uuid
from typing import Any, Literal, MutableMapping, NewType

Document = MutableMapping[str, Any]
"""A document: field name to dynamically typed value."""

DocumentId = NewType("DocumentId", str)
"""Identity assigned to a document on insert."""

ID_FIELD = "_id"
"""Field holding the document identity."""

FIELD_REF_PREFIX = "$"
"""Marks a string as a reference to a document field (``"$status"``)."""

IdFormat = Literal["uuid", "object_id"]


class _Missing:
    """Sentinel for a field that is not present on a document.

    Distinct from ``None``, which is a stored null value.
    """

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def generate_document_id(id_format: IdFormat = "uuid") -> DocumentId:
    """Generate a random document identity.

    Args:
        id_format: ``"uuid"`` for a UUID4 string, ``"object_id"`` for a
            24-character hex string with a leading timestamp.

    Returns:
        A new identity string.
    """
    if id_format == "object_id":
        return DocumentId(f"{int(time.time()):08x}{os.urandom(8).hex()}"[:24])
    return DocumentId(str(uuid.uuid4()))


def get_field(document: Document, field: str) -> Any:
    """Return ``document[field]`` or ``MISSING`` if the field is absent."""
    return document.get(field, MISSING)


def is_field_ref(value: Any) -> bool:
    """Check if a value is a ``$field`` reference string."""
    return isinstance(value, str) and value.startswith(FIELD_REF_PREFIX)


def is_number(value: Any) -> bool:
    """Check for an int or float that is not a bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without cross-type coercion.

    Booleans only equal booleans (``1`` does not equal ``True``), ints and
    floats compare numerically, and ``MISSING`` only equals ``MISSING``.
    """
    if left is MISSING or right is MISSING:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    return bool(left == right)
