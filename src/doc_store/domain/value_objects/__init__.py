"""Value objects for the document store domain.

Exports:
    Identifiers:
        - Document: Mapping of field name to value
        - DocumentId: Type-safe document identity
        - ID_FIELD, FIELD_REF_PREFIX: Field naming conventions
        - MISSING: Sentinel for absent fields
        - generate_document_id: Random identity generation
        - strict_equals: Equality used by filters and joins
"""

from doc_store.domain.value_objects.identifiers import (
    FIELD_REF_PREFIX,
    ID_FIELD,
    MISSING,
    Document,
    DocumentId,
    IdFormat,
    generate_document_id,
    get_field,
    is_field_ref,
    is_number,
    strict_equals,
)

__all__ = [
    "Document",
    "DocumentId",
    "IdFormat",
    "ID_FIELD",
    "FIELD_REF_PREFIX",
    "MISSING",
    "generate_document_id",
    "get_field",
    "is_field_ref",
    "is_number",
    "strict_equals",
]
