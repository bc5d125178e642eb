"""First-field document sorting shared by cursors and ``$sort`` stages."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable

from doc_store.domain.entities.pipeline import SortKey
from doc_store.domain.value_objects import Document, get_field


def compare_values(left: Any, right: Any) -> int:
    """Three-way compare; equal or incomparable values compare as 0."""
    try:
        if left < right:
            return -1
        if left > right:
            return 1
    except TypeError:
        pass
    return 0


def sort_documents(documents: Iterable[Document], key: SortKey | None) -> list[Document]:
    """Return a new list ordered by ``key.field``.

    Documents whose values are missing or incomparable are left unordered
    relative to each other.
    """
    result = list(documents)
    if key is None:
        return result

    sign = -1 if key.descending else 1

    def compare(a: Document, b: Document) -> int:
        return sign * compare_values(get_field(a, key.field), get_field(b, key.field))

    result.sort(key=cmp_to_key(compare))
    return result
